#!/usr/bin/env python3
"""Run the invitation reconciliation sweep.

Pushes invitations held only in the local mirror to the record store and
expires stale pending invitations. Meant to run periodically (cron).
"""

import asyncio
import sys

import logfire

from mingle.application.usecase.invitation import (
    SyncInvitationsRequest,
    SyncInvitationsUseCase,
)
from mingle.config import Settings
from mingle.util.di.container import create_script_container
from mingle.util.observability import configure_logfire


async def run() -> None:
    container = create_script_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(SyncInvitationsUseCase)
            result = await use_case.execute(SyncInvitationsRequest())
        logfire.info(
            "Invitation sweep completed",
            synced=result.synced,
            expired=result.expired,
        )
    finally:
        await container.close()


def main() -> int:
    """Run the sweep and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    try:
        logfire.info("Starting invitation sweep")
        asyncio.run(run())
        return 0

    except Exception as e:
        logfire.error(
            "Invitation sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
