"""Connection routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from mingle.application.usecase.connection import (
    GetConnectionsRequest,
    GetConnectionsResponse,
    GetConnectionsUseCase,
)
from mingle.domain.service import AuthService
from mingle.interface.api.auth import authenticate

router = APIRouter(prefix="/connections", tags=["connections"], route_class=DishkaRoute)


@router.get("", response_model=GetConnectionsResponse)
async def get_connections(
    get_connections_use_case: FromDishka[GetConnectionsUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetConnectionsResponse:
    """List the current user's friends."""
    user = authenticate(auth_service, auth_token, authorization)
    return await get_connections_use_case.execute(GetConnectionsRequest(user_id=user.id))
