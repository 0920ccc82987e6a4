"""Request authentication helpers."""

from mingle.domain.error import NotAuthenticatedError
from mingle.domain.model import CurrentUser
from mingle.domain.service import AuthService
from mingle.interface.error import http_error


def authenticate(
    auth_service: AuthService,
    auth_token: str | None,
    authorization: str | None = None,
) -> CurrentUser:
    """Resolve the caller from the ``auth_token`` cookie or a Bearer header.

    Raises:
        HTTPException: 401 if no valid session is present
    """
    token = auth_token
    if not token and authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer ") :].strip()

    try:
        return auth_service.get_current_user(token)
    except NotAuthenticatedError as e:
        raise http_error(e)
