"""Invitation entity.

An invitation is one inviter's offer to connect with one recipient email.
It is durable in the record store and mirrored into the local cache.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from mingle.domain.error import InvalidTransitionError
from mingle.domain.model.common import DomainModel
from mingle.domain.value import (
    DeliveryMethod,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    SyncState,
    UserId,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Statuses that record when the recipient (or inviter) closed the invitation
_RESPONDED = {
    InvitationStatus.ACCEPTED,
    InvitationStatus.DECLINED,
    InvitationStatus.CANCELLED,
    InvitationStatus.EXPIRED,
}

# Statuses that only make sense once the recipient has an account
_NEEDS_FRIEND = {InvitationStatus.ACCEPTED, InvitationStatus.REGISTERED}


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - One pending invitation per (inviter, recipient email)
    - Recipient email is stored trimmed and lower-cased
    - Status only moves forward (see InvitationStatus.can_transition_to)
    - Never deleted from the record store; cancelling is a status change
    """

    id: InvitationId
    inviter_id: UserId
    inviter_name: str = Field(min_length=1)
    inviter_avatar: Optional[str] = None  # Storage key, resolved per read
    recipient_email: EmailAddress
    recipient_name: Optional[str] = None
    message: Optional[str] = None
    status: InvitationStatus = InvitationStatus.PENDING
    sent_at: datetime = Field(default_factory=utcnow)
    message_id: Optional[str] = None
    delivery_method: Optional[DeliveryMethod] = None
    sync_state: SyncState = SyncState.SYNCED
    friend_id: Optional[UserId] = None  # Recipient's user id once known
    responded_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_status_shape(self) -> "Invitation":
        """Enforce the fields each status requires."""
        if self.status in _NEEDS_FRIEND and self.friend_id is None:
            raise ValueError(f"A {self.status.value} invitation requires friend_id")
        if self.status in _RESPONDED and self.responded_at is None:
            raise ValueError(f"A {self.status.value} invitation requires responded_at")
        return self

    @model_validator(mode="before")
    @classmethod
    def default_recipient_name(cls, data):
        """Derive the recipient name from the email local-part when absent."""
        if isinstance(data, dict) and not data.get("recipient_name"):
            email = data.get("recipient_email")
            raw = email.root if isinstance(email, EmailAddress) else email
            if isinstance(raw, str) and "@" in raw:
                data = {**data, "recipient_name": raw.strip().split("@", 1)[0]}
        return data

    @property
    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def transition(
        self,
        status: InvitationStatus,
        friend_id: UserId | None = None,
        at: datetime | None = None,
    ) -> "Invitation":
        """Return a copy moved to ``status``.

        Raises:
            InvalidTransitionError: If the state machine forbids the move
        """
        if not self.status.can_transition_to(status):
            raise InvalidTransitionError(self.status.value, status.value)

        updates: dict = {"status": status}
        if friend_id is not None:
            updates["friend_id"] = friend_id
        if status in _RESPONDED:
            updates["responded_at"] = at or utcnow()

        # Rebuild rather than model_copy so the status shape is validated
        return Invitation(**{**dict(self), **updates})
