"""Notification feed routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from mingle.application.usecase.notification import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
    NotificationItem,
    RespondToFriendRequestRequest,
    RespondToFriendRequestResponse,
    RespondToFriendRequestUseCase,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)
from mingle.domain.error import DomainError
from mingle.domain.service import AuthService
from mingle.interface.api.auth import authenticate
from mingle.interface.error import http_error

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


class SendFriendRequestAPIRequest(BaseModel):
    to_user_id: str


@router.get("", response_model=GetNotificationsResponse)
async def get_notifications(
    get_notifications_use_case: FromDishka[GetNotificationsUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetNotificationsResponse:
    """Get the current user's notifications, newest first."""
    user = authenticate(auth_service, auth_token, authorization)
    return await get_notifications_use_case.execute(
        GetNotificationsRequest(user_id=user.id)
    )


@router.post(
    "/friend-requests",
    response_model=NotificationItem,
    status_code=status.HTTP_201_CREATED,
)
async def send_friend_request(
    request: SendFriendRequestAPIRequest,
    send_friend_request_use_case: FromDishka[SendFriendRequestUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> NotificationItem:
    """Ask an existing user to connect."""
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await send_friend_request_use_case.execute(
            SendFriendRequestRequest(
                from_user_id=user.id,
                from_username=user.username,
                to_user_id=request.to_user_id,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post("/{notification_id}/read", response_model=MarkNotificationReadResponse)
async def mark_notification_read(
    notification_id: str,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> MarkNotificationReadResponse:
    """Mark a notification as read."""
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await mark_read_use_case.execute(
            MarkNotificationReadRequest(user_id=user.id, notification_id=notification_id)
        )
    except DomainError as e:
        raise http_error(e)


async def _respond(
    action: str,
    notification_id: str,
    use_case: RespondToFriendRequestUseCase,
    auth_service: AuthService,
    auth_token: str | None,
    authorization: str | None,
) -> RespondToFriendRequestResponse:
    user = authenticate(auth_service, auth_token, authorization)
    try:
        return await use_case.execute(
            RespondToFriendRequestRequest(
                user_id=user.id,
                user_email=user.email,
                notification_id=notification_id,
                action=action,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post(
    "/{notification_id}/accept", response_model=RespondToFriendRequestResponse
)
async def accept_friend_request(
    notification_id: str,
    respond_use_case: FromDishka[RespondToFriendRequestUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondToFriendRequestResponse:
    """Accept a friend request and connect both users."""
    return await _respond(
        "accept", notification_id, respond_use_case, auth_service, auth_token, authorization
    )


@router.post(
    "/{notification_id}/decline", response_model=RespondToFriendRequestResponse
)
async def decline_friend_request(
    notification_id: str,
    respond_use_case: FromDishka[RespondToFriendRequestUseCase],
    auth_service: FromDishka[AuthService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondToFriendRequestResponse:
    """Decline a friend request."""
    return await _respond(
        "decline", notification_id, respond_use_case, auth_service, auth_token, authorization
    )
