"""Local key-value cache interfaces.

The cache replaces ad-hoc global keys with namespaced, typed collections.
"""

from abc import ABC, abstractmethod

from mingle.domain.model.notification import Notification, PendingFriendRequest
from mingle.domain.model.token import TokenPayload
from mingle.domain.value import EmailAddress, InvitationToken, NotificationId, UserId


class KeyValueStore(ABC):
    """Raw string key-value backend.

    Implementations raise CacheError when the backing medium fails.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]:
        pass


class TokenRepository(ABC):
    """Token payloads keyed by token string."""

    @abstractmethod
    def get(self, token: InvitationToken) -> TokenPayload | None:
        pass

    @abstractmethod
    def put(self, payload: TokenPayload) -> None:
        pass

    @abstractmethod
    def delete(self, token: InvitationToken) -> None:
        pass


class NotificationRepository(ABC):
    """Per-recipient notification feeds."""

    @abstractmethod
    def list_for(self, recipient_id: UserId) -> list[Notification]:
        """Newest first."""
        pass

    @abstractmethod
    def add(self, notification: Notification) -> None:
        pass

    @abstractmethod
    def replace(self, notification: Notification) -> bool:
        """Replace an entry with the same id. Returns whether it existed."""
        pass

    @abstractmethod
    def delete(self, recipient_id: UserId, notification_id: NotificationId) -> bool:
        pass


class PendingFriendRequestRepository(ABC):
    """Friend requests waiting for a recipient email to become a user."""

    @abstractmethod
    def list_for(self, email: EmailAddress) -> list[PendingFriendRequest]:
        pass

    @abstractmethod
    def add(self, marker: PendingFriendRequest) -> None:
        """Add a marker, replacing any from the same inviter."""
        pass

    @abstractmethod
    def clear(self, email: EmailAddress) -> None:
        pass

    @abstractmethod
    def remove(self, email: EmailAddress, inviter_id: UserId) -> bool:
        """Drop the marker from ``inviter_id``. Returns whether it existed."""
        pass
