"""Test harness for unit, integration and E2E tests.

Integration tests assume docker-compose services (postgres) are already
running. Settings are loaded from environment variables (configure via
.env or export).
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest_asyncio
from fastapi import FastAPI

from mingle.config import AuthSettings
from mingle.interface.api.app import create_app
from mingle.util.di import Component
from tests.di import build_test_container


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with specified unmocking
    - Yields request-scoped container for service access
    - Assumes docker services already running (no docker management)

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no docker needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_create_invitation(unit_env):
            service = await unit_env.get(InvitationService)
            invitation = await service.create(...)
            assert invitation.is_pending
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def create_test_app(unmock: set[Component] | None = None) -> FastAPI:
    """Build the API on a test container.

    Mock components are APP-scoped, so state written by one request is
    visible to the next within the same app.
    """
    container = build_test_container(unmock=unmock or set(), fastapi=True)
    return create_app(container)


def issue_token(
    user_id: str,
    username: str,
    email: str | None = None,
    settings: AuthSettings | None = None,
    expires_in: timedelta = timedelta(days=1),
) -> str:
    """Sign a session token the way the hosted auth service does."""
    settings = settings or AuthSettings()
    payload = {
        "sub": user_id,
        "username": username,
        "email": email,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(
    user_id: str, username: str, email: str | None = None
) -> dict[str, str]:
    """Bearer header for a session issued to ``user_id``."""
    token = issue_token(user_id, username, email)
    return {"Authorization": f"Bearer {token}"}
