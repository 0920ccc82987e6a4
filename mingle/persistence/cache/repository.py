"""Cache-backed repositories.

Each repository owns one namespace of the local key-value cache.
"""

from pydantic import TypeAdapter

from mingle.domain.model import Invitation, Notification, PendingFriendRequest, TokenPayload
from mingle.domain.repository import (
    InvitationMirror,
    KeyValueStore,
    NotificationRepository,
    PendingFriendRequestRepository,
    TokenRepository,
)
from mingle.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationToken,
    NotificationId,
    UserId,
)

from .store import NamespacedStore

TOKEN_NAMESPACE = "invitation_tokens"
MIRROR_NAMESPACE = "pending_invitations"
NOTIFICATION_NAMESPACE = "notifications"
FRIEND_REQUEST_NAMESPACE = "pending_friend_requests"


class CachedTokenRepository(TokenRepository):
    """Token payloads, one entry per token."""

    def __init__(self, store: KeyValueStore, version: int) -> None:
        self.entries = NamespacedStore(
            store, TOKEN_NAMESPACE, TypeAdapter(TokenPayload), version
        )

    def get(self, token: InvitationToken) -> TokenPayload | None:
        return self.entries.get(token.root)

    def put(self, payload: TokenPayload) -> None:
        self.entries.set(payload.token.root, payload)

    def delete(self, token: InvitationToken) -> None:
        self.entries.delete(token.root)


class CachedInvitationMirror(InvitationMirror):
    """Sent invitations, one list per inviter."""

    def __init__(self, store: KeyValueStore, version: int) -> None:
        self.entries = NamespacedStore(
            store, MIRROR_NAMESPACE, TypeAdapter(list[Invitation]), version
        )

    def get_all(self, inviter_id: UserId) -> list[Invitation]:
        return self.entries.get(inviter_id) or []

    def save_all(self, inviter_id: UserId, invitations: list[Invitation]) -> None:
        self.entries.set(inviter_id, invitations)

    def add(self, invitation: Invitation) -> None:
        current = [i for i in self.get_all(invitation.inviter_id) if i.id != invitation.id]
        self.save_all(invitation.inviter_id, [invitation, *current])

    def remove(self, inviter_id: UserId, invitation_id: InvitationId) -> bool:
        current = self.get_all(inviter_id)
        kept = [i for i in current if i.id != invitation_id]
        if len(kept) == len(current):
            return False
        self.save_all(inviter_id, kept)
        return True

    def inviters(self) -> list[UserId]:
        return [UserId(k) for k in self.entries.keys()]


class CachedNotificationRepository(NotificationRepository):
    """Notification feeds, one list per recipient, newest first."""

    def __init__(self, store: KeyValueStore, version: int) -> None:
        self.entries = NamespacedStore(
            store, NOTIFICATION_NAMESPACE, TypeAdapter(list[Notification]), version
        )

    def list_for(self, recipient_id: UserId) -> list[Notification]:
        return self.entries.get(recipient_id) or []

    def add(self, notification: Notification) -> None:
        feed = self.list_for(notification.recipient_id)
        self.entries.set(notification.recipient_id, [notification, *feed])

    def replace(self, notification: Notification) -> bool:
        feed = self.list_for(notification.recipient_id)
        replaced = False
        updated = []
        for existing in feed:
            if existing.id == notification.id:
                updated.append(notification)
                replaced = True
            else:
                updated.append(existing)
        if replaced:
            self.entries.set(notification.recipient_id, updated)
        return replaced

    def delete(self, recipient_id: UserId, notification_id: NotificationId) -> bool:
        feed = self.list_for(recipient_id)
        kept = [n for n in feed if n.id != notification_id]
        if len(kept) == len(feed):
            return False
        self.entries.set(recipient_id, kept)
        return True


class CachedPendingFriendRequestRepository(PendingFriendRequestRepository):
    """Friend request markers, one list per recipient email."""

    def __init__(self, store: KeyValueStore, version: int) -> None:
        self.entries = NamespacedStore(
            store,
            FRIEND_REQUEST_NAMESPACE,
            TypeAdapter(list[PendingFriendRequest]),
            version,
        )

    def list_for(self, email: EmailAddress) -> list[PendingFriendRequest]:
        return self.entries.get(email.root) or []

    def add(self, marker: PendingFriendRequest) -> None:
        current = [
            m for m in self.list_for(marker.recipient_email) if m.inviter_id != marker.inviter_id
        ]
        self.entries.set(marker.recipient_email.root, [*current, marker])

    def clear(self, email: EmailAddress) -> None:
        self.entries.delete(email.root)

    def remove(self, email: EmailAddress, inviter_id: UserId) -> bool:
        current = self.list_for(email)
        remaining = [m for m in current if m.inviter_id != inviter_id]
        if len(remaining) == len(current):
            return False
        if remaining:
            self.entries.set(email.root, remaining)
        else:
            self.entries.delete(email.root)
        return True
