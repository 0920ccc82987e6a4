"""Authentication domain service."""

import logfire

from mingle.domain.error import NotAuthenticatedError
from mingle.domain.model.profile import CurrentUser
from mingle.domain.value import UserId
from mingle.util.jwt import JWTError

from .base import Service
from .jwt_service import JWTService


class AuthService(Service):
    """Resolves the caller from a session token issued by the auth service."""

    def __init__(self, jwt_service: JWTService) -> None:
        self.jwt_service = jwt_service

    def get_current_user(self, token: str | None) -> CurrentUser:
        """Get the authenticated user for a session token.

        Args:
            token: Session token from cookie or header

        Returns:
            Current user

        Raises:
            NotAuthenticatedError: If the token is missing, invalid or expired
        """
        if not token:
            raise NotAuthenticatedError("Not authenticated")

        try:
            payload = self.jwt_service.verify_token(token)
        except JWTError as e:
            raise NotAuthenticatedError(str(e))

        logfire.debug("Session resolved", user_id=payload.sub)
        return CurrentUser(
            id=UserId(payload.sub),
            username=payload.username,
            email=payload.email,
        )
