#!/usr/bin/env python3
"""Run database migrations with Logfire error tracking.

Usage:
    run_migrations.py              # upgrade to head
    run_migrations.py <revision>   # upgrade to a specific revision
    run_migrations.py --downgrade <revision>
"""

import sys
import logfire
from alembic import command
from alembic.config import Config

from mingle.config import Settings
from mingle.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Apply migrations and log any errors to Logfire."""
    settings = Settings()
    configure_logfire(settings)

    downgrade = "--downgrade" in argv
    args = [a for a in argv if a != "--downgrade"]
    revision = args[0] if args else "head"
    if downgrade and not args:
        logfire.error("Downgrade requires a target revision")
        return 2

    try:
        logfire.info(
            "Starting database migrations",
            revision=revision,
            direction="down" if downgrade else "up",
            environment=settings.environment,
        )

        alembic_cfg = Config("alembic.ini")
        if downgrade:
            command.downgrade(alembic_cfg, revision)
        else:
            command.upgrade(alembic_cfg, revision)

        logfire.info("Database migrations completed successfully", revision=revision)
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            revision=revision,
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
