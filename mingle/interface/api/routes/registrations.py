"""Sign-up hook routes.

Called by the frontend right after the hosted auth service creates an
account, with the new user's session.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, HTTPException, status
from pydantic import BaseModel

from mingle.application.usecase.invitation import (
    HandleRegistrationRequest,
    HandleRegistrationResponse,
    HandleRegistrationUseCase,
)
from mingle.domain.error import DomainError
from mingle.domain.service import AuthService
from mingle.interface.api.auth import authenticate
from mingle.interface.error import http_error

router = APIRouter(
    prefix="/registrations", tags=["registrations"], route_class=DishkaRoute
)


class RegistrationAPIRequest(BaseModel):
    first_name: str | None = None
    last_name: str | None = None


@router.post("", response_model=HandleRegistrationResponse)
async def handle_registration(
    handle_registration_use_case: FromDishka[HandleRegistrationUseCase],
    auth_service: FromDishka[AuthService],
    request: RegistrationAPIRequest | None = None,
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> HandleRegistrationResponse:
    """Connect a new user with everyone who invited their email."""
    user = authenticate(auth_service, auth_token, authorization)
    if not user.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Session has no email address",
        )

    request = request or RegistrationAPIRequest()
    try:
        return await handle_registration_use_case.execute(
            HandleRegistrationRequest(
                user_id=user.id,
                email=user.email,
                first_name=request.first_name,
                last_name=request.last_name,
                username=user.username,
            )
        )
    except DomainError as e:
        raise http_error(e)
