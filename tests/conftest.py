"""Test configuration and fixtures."""

from datetime import datetime, timezone
from uuid import uuid4

from mingle.domain.error import CacheError
from mingle.domain.model import Invitation, UserProfile
from mingle.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    SyncState,
    UserId,
)
from mingle.persistence.cache import (
    CachedNotificationRepository,
    CachedPendingFriendRequestRepository,
    InMemoryKeyValueStore,
)


def make_invitation(
    inviter_id: str = "user-alice",
    recipient_email: str = "bob@example.com",
    status: InvitationStatus = InvitationStatus.PENDING,
    sent_at: datetime | None = None,
    sync_state: SyncState = SyncState.SYNCED,
    **overrides,
) -> Invitation:
    """Build an invitation for tests.

    Fills the fields each status requires (friend id, responded_at).
    """
    fields = {
        "id": InvitationId(uuid4()),
        "inviter_id": UserId(inviter_id),
        "inviter_name": "Alice Smith",
        "recipient_email": EmailAddress(recipient_email),
        "status": status,
        "sent_at": sent_at or datetime.now(timezone.utc),
        "sync_state": sync_state,
    }
    if status in (InvitationStatus.ACCEPTED, InvitationStatus.REGISTERED):
        fields["friend_id"] = UserId("user-bob")
    if status not in (InvitationStatus.PENDING, InvitationStatus.REGISTERED):
        fields["responded_at"] = datetime.now(timezone.utc)
    fields.update(overrides)
    return Invitation(**fields)


def make_profile(
    user_id: str,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    photo_key: str | None = None,
) -> UserProfile:
    """Build a user profile for tests."""
    return UserProfile(
        user_id=UserId(user_id),
        first_name=first_name,
        last_name=last_name,
        username=user_id,
        email=email,
        profile_photo_key=photo_key,
    )


class UnwritableNotificationRepository(CachedNotificationRepository):
    """Feed store whose writes fail, as when the cache file is read-only."""

    def __init__(self):
        super().__init__(InMemoryKeyValueStore(), 1)

    def add(self, notification):
        raise CacheError("Cache file not writable")

    def replace(self, notification):
        raise CacheError("Cache file not writable")

    def delete(self, recipient_id, notification_id):
        raise CacheError("Cache file not writable")


class UnwritablePendingFriendRequestRepository(CachedPendingFriendRequestRepository):
    def __init__(self):
        super().__init__(InMemoryKeyValueStore(), 1)

    def add(self, marker):
        raise CacheError("Cache file not writable")

    def remove(self, email, inviter_id):
        raise CacheError("Cache file not writable")

    def clear(self, email):
        raise CacheError("Cache file not writable")
