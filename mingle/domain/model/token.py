"""Invitation token payload.

Client-held context bound to an emailed token. Lives only in the local
cache and expires on its own.
"""

from datetime import datetime
from typing import Optional

from mingle.domain.model.common import DomainModel
from mingle.domain.value import EmailAddress, InvitationToken


class TokenPayload(DomainModel):
    """Context stashed for a minted invitation token."""

    token: InvitationToken
    inviter_name: str
    recipient_name: str
    recipient_email: EmailAddress
    inviter_avatar: Optional[str] = None
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
