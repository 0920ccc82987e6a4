"""Local cache infrastructure providers."""

import logfire
from dishka import Scope, provide

from mingle.config import CacheSettings
from mingle.domain.repository import (
    InvitationMirror,
    KeyValueStore,
    NotificationRepository,
    PendingFriendRequestRepository,
    TokenRepository,
)
from mingle.persistence.cache import (
    CachedInvitationMirror,
    CachedNotificationRepository,
    CachedPendingFriendRequestRepository,
    CachedTokenRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from mingle.util.di.base import ProviderBase


class CacheProvider(ProviderBase):
    """Cache component base. Implementations provide the KeyValueStore."""

    __mock_component__ = "cache"


class ProdCacheProvider(CacheProvider):
    """Production cache provider: JSON file when configured, else in-memory."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_store(self, settings: CacheSettings) -> KeyValueStore:
        if settings.path:
            logfire.info("Using file-backed cache", path=settings.path)
            return JsonFileKeyValueStore(settings.path)
        return InMemoryKeyValueStore()


class CacheRepositoryProvider(ProviderBase):
    """Cache-backed repositories over whichever KeyValueStore is provided.

    Shared by every request.
    """

    scope = Scope.APP

    @provide
    def get_token_repository(
        self, store: KeyValueStore, settings: CacheSettings
    ) -> TokenRepository:
        return CachedTokenRepository(store, settings.schema_version)

    @provide
    def get_invitation_mirror(
        self, store: KeyValueStore, settings: CacheSettings
    ) -> InvitationMirror:
        return CachedInvitationMirror(store, settings.schema_version)

    @provide
    def get_notification_repository(
        self, store: KeyValueStore, settings: CacheSettings
    ) -> NotificationRepository:
        return CachedNotificationRepository(store, settings.schema_version)

    @provide
    def get_pending_friend_request_repository(
        self, store: KeyValueStore, settings: CacheSettings
    ) -> PendingFriendRequestRepository:
        return CachedPendingFriendRequestRepository(store, settings.schema_version)
