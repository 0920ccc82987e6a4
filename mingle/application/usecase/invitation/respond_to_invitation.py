"""Accept or decline an invitation from its landing page."""

from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.invitation.item import InvitationItem
from mingle.domain.error import NotAuthorizedError, ValidationError
from mingle.domain.model import Invitation
from mingle.domain.service import (
    ConnectionService,
    InvitationService,
    NotificationService,
)
from mingle.domain.value import InvitationId, InvitationStatus, UserId


class RespondToInvitationRequest(BaseModel):
    """Recipient's answer to an invitation."""

    invitation_id: str
    user_id: str
    user_email: str | None = None
    action: Literal["accept", "decline"]


class RespondToInvitationResponse(BaseModel):
    invitation: InvitationItem
    connected: bool


def is_recipient(invitation: Invitation, user_id: UserId, user_email: str | None) -> bool:
    """Whether the caller is the invitation's recipient."""
    if invitation.friend_id is not None:
        return invitation.friend_id == user_id
    return bool(user_email) and user_email.strip().lower() == invitation.recipient_email.root


class RespondToInvitationUseCase(BaseUseCase):
    """Use case for the recipient accepting or declining by invitation id.

    Accepting connects both users; either answer clears the matching
    friend request from the recipient's feed.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        connection_service: ConnectionService,
        notification_service: NotificationService,
    ) -> None:
        self.invitation_service = invitation_service
        self.connection_service = connection_service
        self.notification_service = notification_service

    async def execute(
        self, request: RespondToInvitationRequest
    ) -> RespondToInvitationResponse:
        """Execute respond to invitation use case.

        Raises:
            NotFoundError: If the invitation does not exist
            NotAuthorizedError: If the caller is not the recipient
            ValidationError: If the inviter answers their own invitation
            InvalidTransitionError: If the invitation was already closed
        """
        invitation_id = InvitationId(UUID(request.invitation_id))
        user_id = UserId(request.user_id)

        with logfire.span(
            "respond_to_invitation",
            invitation_id=str(invitation_id),
            action=request.action,
        ):
            invitation = await self.invitation_service.get(invitation_id)
            if invitation.inviter_id == user_id:
                raise ValidationError("You cannot answer your own invitation")
            if not is_recipient(invitation, user_id, request.user_email):
                raise NotAuthorizedError("invitation", str(invitation_id), user_id)

            connected = False
            if request.action == "accept":
                updated = await self.invitation_service.update_status(
                    invitation_id, InvitationStatus.ACCEPTED, friend_id=user_id
                )
                pair = await self.connection_service.create_bidirectional(
                    invitation.inviter_id, user_id
                )
                connected = pair.complete
            else:
                updated = await self.invitation_service.update_status(
                    invitation_id, InvitationStatus.DECLINED, friend_id=user_id
                )

            for notification in self.notification_service.list_for(user_id):
                if (
                    notification.is_friend_request
                    and notification.inviter_id == invitation.inviter_id
                ):
                    self.notification_service.delete(user_id, notification.id)

            logfire.info(
                "Invitation answered",
                invitation_id=str(invitation_id),
                status=updated.status.value,
            )
            return RespondToInvitationResponse(
                invitation=InvitationItem.from_invitation(updated),
                connected=connected,
            )
