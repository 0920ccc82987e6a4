"""Notification feed entries."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from mingle.domain.model.common import DomainModel
from mingle.domain.value import EmailAddress, NotificationId, TextAvatar, UserId


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Notification(DomainModel):
    """Recipient-visible event.

    Friend requests carry the inviter so the recipient can accept or
    decline straight from the feed.
    """

    id: NotificationId
    recipient_id: UserId
    title: str
    description: Optional[str] = None
    avatar: Optional[str] = None  # Fetchable URL
    text_avatar: Optional[TextAvatar] = None
    created_at: datetime = Field(default_factory=_now)
    is_read: bool = False
    is_friend_request: bool = False
    inviter_id: Optional[UserId] = None
    inviter_name: Optional[str] = None


class PendingFriendRequest(DomainModel):
    """Friend request waiting for a recipient email to map to a user.

    Recorded at dispatch time and turned into a Notification once a user
    with that email exists.
    """

    recipient_email: EmailAddress
    inviter_id: UserId
    inviter_name: str
    inviter_avatar: Optional[str] = None  # Storage key
    created_at: datetime = Field(default_factory=_now)
