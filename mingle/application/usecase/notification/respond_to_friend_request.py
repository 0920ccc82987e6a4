"""Accept or decline a friend request from the notification feed."""

from typing import Literal

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.domain.error import DomainError, ValidationError
from mingle.domain.service import (
    ConnectionService,
    InvitationService,
    NotificationService,
    parse_email,
)
from mingle.domain.value import InvitationStatus, NotificationId, UserId


class RespondToFriendRequestRequest(BaseModel):
    user_id: str
    user_email: str | None = None
    notification_id: str
    action: Literal["accept", "decline"]


class RespondToFriendRequestResponse(BaseModel):
    connected: bool
    # Invitation moved along with the answer, if one matched
    invitation_id: str | None = None


class RespondToFriendRequestUseCase(BaseUseCase):
    """Use case for answering a friend-request notification.

    Accept connects both users; either answer removes the notification and
    closes the invitation that produced it, if any.
    """

    def __init__(
        self,
        notification_service: NotificationService,
        connection_service: ConnectionService,
        invitation_service: InvitationService,
    ) -> None:
        self.notification_service = notification_service
        self.connection_service = connection_service
        self.invitation_service = invitation_service

    async def execute(
        self, request: RespondToFriendRequestRequest
    ) -> RespondToFriendRequestResponse:
        """Execute respond to friend request use case.

        Raises:
            NotFoundError: If the caller's feed has no such notification
            ValidationError: If the notification is not a friend request
        """
        user_id = UserId(request.user_id)
        notification_id = NotificationId(request.notification_id)

        with logfire.span(
            "respond_to_friend_request",
            notification_id=notification_id,
            action=request.action,
        ):
            notification = self.notification_service.get(user_id, notification_id)
            if not notification.is_friend_request or notification.inviter_id is None:
                raise ValidationError("Notification is not a friend request")
            inviter_id = notification.inviter_id

            connected = False
            if request.action == "accept":
                pair = await self.connection_service.create_bidirectional(inviter_id, user_id)
                connected = pair.complete

            self.notification_service.delete(user_id, notification_id)

            invitation_id = None
            if request.user_email:
                invitation_id = await self._close_invitation(
                    inviter_id, user_id, request.user_email, request.action
                )

            return RespondToFriendRequestResponse(
                connected=connected, invitation_id=invitation_id
            )

    async def _close_invitation(
        self, inviter_id: UserId, user_id: UserId, user_email: str, action: str
    ) -> str | None:
        status = (
            InvitationStatus.ACCEPTED if action == "accept" else InvitationStatus.DECLINED
        )
        # Best-effort: the answer stands even if the invitation cannot be updated
        try:
            invitations = await self.invitation_service.find_by_recipient_email(
                parse_email(user_email)
            )
            for invitation in invitations:
                if invitation.inviter_id == inviter_id and invitation.status.is_open:
                    updated = await self.invitation_service.update_status(
                        invitation.id, status, friend_id=user_id
                    )
                    return str(updated.id)
        except DomainError as e:
            logfire.warn("Invitation not closed", inviter_id=str(inviter_id), error=str(e))
        return None
