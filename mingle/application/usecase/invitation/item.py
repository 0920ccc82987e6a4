"""Invitation item shared by invitation use case responses."""

from datetime import datetime

from pydantic import BaseModel

from mingle.domain.model import Invitation
from mingle.domain.value import DeliveryMethod, InvitationStatus, SyncState


class InvitationItem(BaseModel):
    """Invitation as returned to API clients."""

    invitation_id: str
    inviter_id: str
    inviter_name: str
    inviter_avatar_url: str | None = None
    recipient_email: str
    recipient_name: str | None
    message: str | None
    status: InvitationStatus
    sent_at: datetime
    message_id: str | None
    delivery_method: DeliveryMethod | None
    sync_state: SyncState
    friend_id: str | None
    responded_at: datetime | None

    @classmethod
    def from_invitation(
        cls, invitation: Invitation, inviter_avatar_url: str | None = None
    ) -> "InvitationItem":
        return cls(
            invitation_id=str(invitation.id),
            inviter_id=invitation.inviter_id,
            inviter_name=invitation.inviter_name,
            inviter_avatar_url=inviter_avatar_url,
            recipient_email=invitation.recipient_email.root,
            recipient_name=invitation.recipient_name,
            message=invitation.message,
            status=invitation.status,
            sent_at=invitation.sent_at,
            message_id=invitation.message_id,
            delivery_method=invitation.delivery_method,
            sync_state=invitation.sync_state,
            friend_id=invitation.friend_id,
            responded_at=invitation.responded_at,
        )
