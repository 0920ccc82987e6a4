"""Repository interfaces for the Mingle domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from mingle.domain.repository.cache import (
    KeyValueStore,
    NotificationRepository,
    PendingFriendRequestRepository,
    TokenRepository,
)
from mingle.domain.repository.connection import ConnectionRepository
from mingle.domain.repository.invitation import InvitationMirror, InvitationRepository
from mingle.domain.repository.profile import ProfileRepository

__all__ = [
    "ConnectionRepository",
    "InvitationMirror",
    "InvitationRepository",
    "KeyValueStore",
    "NotificationRepository",
    "PendingFriendRequestRepository",
    "ProfileRepository",
    "TokenRepository",
]
