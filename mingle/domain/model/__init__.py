"""Domain model entities for Mingle."""

from mingle.domain.model.connection import Connection, ConnectionPair
from mingle.domain.model.invitation import Invitation
from mingle.domain.model.notification import Notification, PendingFriendRequest
from mingle.domain.model.profile import CurrentUser, UserProfile
from mingle.domain.model.token import TokenPayload

__all__ = [
    "Connection",
    "ConnectionPair",
    "CurrentUser",
    "Invitation",
    "Notification",
    "PendingFriendRequest",
    "TokenPayload",
    "UserProfile",
]
