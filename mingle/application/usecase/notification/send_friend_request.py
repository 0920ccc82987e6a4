"""Send friend request use case."""

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.notification.item import NotificationItem
from mingle.domain.error import NotFoundError, ValidationError
from mingle.domain.service import ConnectionService, NotificationService, ProfileService
from mingle.domain.value import UserId


class SendFriendRequestRequest(BaseModel):
    """Direct request between two registered users."""

    from_user_id: str
    from_username: str | None = None
    to_user_id: str


class SendFriendRequestUseCase(BaseUseCase):
    """Use case for asking an existing user to connect, without email."""

    def __init__(
        self,
        notification_service: NotificationService,
        connection_service: ConnectionService,
        profile_service: ProfileService,
    ) -> None:
        self.notification_service = notification_service
        self.connection_service = connection_service
        self.profile_service = profile_service

    async def execute(self, request: SendFriendRequestRequest) -> NotificationItem:
        """Execute send friend request use case.

        Raises:
            ValidationError: If sent to self or the users are already connected
            NotFoundError: If the recipient has no profile
        """
        from_id = UserId(request.from_user_id)
        to_id = UserId(request.to_user_id)
        if from_id == to_id:
            raise ValidationError("You cannot send a friend request to yourself")

        with logfire.span(
            "send_friend_request", from_user_id=str(from_id), to_user_id=str(to_id)
        ):
            if await self.profile_service.get(to_id) is None:
                raise NotFoundError("User", str(to_id))
            if await self.connection_service.are_connected(from_id, to_id):
                raise ValidationError("You are already connected")

            name = await self.profile_service.display_name(
                from_id, fallback=request.from_username
            )
            avatar = await self.profile_service.avatar_url(
                await self.profile_service.avatar_key(from_id)
            )
            notification = self.notification_service.create_friend_request(
                recipient_id=to_id,
                inviter_id=from_id,
                inviter_name=name,
                avatar=avatar,
            )
            return NotificationItem.from_notification(notification)
