"""Local ephemeral cache: key-value backends and cache-backed repositories."""

from .repository import (
    CachedInvitationMirror,
    CachedNotificationRepository,
    CachedPendingFriendRequestRepository,
    CachedTokenRepository,
)
from .store import InMemoryKeyValueStore, JsonFileKeyValueStore, NamespacedStore

__all__ = [
    "CachedInvitationMirror",
    "CachedNotificationRepository",
    "CachedPendingFriendRequestRepository",
    "CachedTokenRepository",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "NamespacedStore",
]
