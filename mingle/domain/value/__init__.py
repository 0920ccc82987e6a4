"""Domain value objects for Mingle."""

from mingle.domain.value.identifiers import (
    ConnectionId,
    InvitationId,
    NotificationId,
    UserId,
)
from mingle.domain.value.types import (
    AvatarVariant,
    DeliveryErrorKind,
    DeliveryMethod,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    SyncState,
    TextAvatar,
)

__all__ = [
    # Identifiers
    "UserId",
    "InvitationId",
    "ConnectionId",
    "NotificationId",
    # Types
    "AvatarVariant",
    "DeliveryErrorKind",
    "DeliveryMethod",
    "EmailAddress",
    "InvitationStatus",
    "InvitationToken",
    "SyncState",
    "TextAvatar",
]
