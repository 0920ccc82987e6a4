"""Unit tests for AuthService and request authentication."""

from datetime import timedelta

import pytest
from fastapi import HTTPException

from mingle.config import AuthSettings
from mingle.domain.error import NotAuthenticatedError
from mingle.domain.service import AuthService
from mingle.interface.api.auth import authenticate
from tests.harness import create_env_fixture, issue_token

unit_env = create_env_fixture()


class TestAuthService:
    """Tests for resolving the caller from a session token."""

    @pytest.mark.asyncio
    async def test_valid_token(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        token = issue_token("user-alice", "alice", "alice@example.com")

        user = auth_service.get_current_user(token)

        assert user.id == "user-alice"
        assert user.username == "alice"
        assert user.email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_missing_token(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(NotAuthenticatedError):
            auth_service.get_current_user(None)

    @pytest.mark.asyncio
    async def test_token_signed_elsewhere(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        other = AuthSettings(jwt_secret="another-deployment-secret-value-0123")
        token = issue_token("user-alice", "alice", settings=other)

        with pytest.raises(NotAuthenticatedError):
            auth_service.get_current_user(token)

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        token = issue_token("user-alice", "alice", expires_in=timedelta(minutes=-5))

        with pytest.raises(NotAuthenticatedError):
            auth_service.get_current_user(token)


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_bearer_header(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        token = issue_token("user-bob", "bob")

        user = authenticate(auth_service, None, f"Bearer {token}")

        assert user.id == "user-bob"

    @pytest.mark.asyncio
    async def test_cookie_wins_over_header(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        cookie = issue_token("user-alice", "alice")
        header = issue_token("user-bob", "bob")

        user = authenticate(auth_service, cookie, f"Bearer {header}")

        assert user.id == "user-alice"

    @pytest.mark.asyncio
    async def test_no_session(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(HTTPException) as exc_info:
            authenticate(auth_service, None, "Basic abc")

        assert exc_info.value.status_code == 401
