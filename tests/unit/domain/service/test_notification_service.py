"""Unit tests for NotificationService."""

import pytest

from mingle.domain.error import NotFoundError
from mingle.domain.repository import PendingFriendRequestRepository
from mingle.domain.service import NotificationService
from mingle.domain.value import EmailAddress, NotificationId, UserId
from tests.conftest import UnwritableNotificationRepository
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = UserId("user-alice")
BOB = UserId("user-bob")


class TestFriendRequests:
    """Tests for friend-request notifications."""

    @pytest.mark.asyncio
    async def test_create_friend_request(self, unit_env):
        service = await unit_env.get(NotificationService)

        notification = service.create_friend_request(BOB, ALICE, "Alice Smith")

        assert notification.title == "Alice Smith sent you a friend request."
        assert notification.description == "Wants to connect with you"
        assert notification.is_friend_request is True
        assert notification.is_read is False
        assert notification.inviter_id == ALICE
        assert notification.id.startswith("notif_")
        # No photo, so a text avatar stands in
        assert notification.text_avatar.text == "A"

    @pytest.mark.asyncio
    async def test_avatar_url_replaces_text_avatar(self, unit_env):
        service = await unit_env.get(NotificationService)

        notification = service.create_friend_request(
            BOB, ALICE, "Alice", avatar="https://storage.test/a.png"
        )

        assert notification.avatar == "https://storage.test/a.png"
        assert notification.text_avatar is None

    @pytest.mark.asyncio
    async def test_one_request_per_inviter(self, unit_env):
        """A second request from the same inviter returns the first."""
        service = await unit_env.get(NotificationService)

        first = service.create_friend_request(BOB, ALICE, "Alice")
        second = service.create_friend_request(BOB, ALICE, "Alice")
        other = service.create_friend_request(BOB, UserId("user-carol"), "Carol")

        assert second.id == first.id
        assert len(service.list_for(BOB)) == 2
        assert service.list_for(BOB)[0].id == other.id


class TestFeed:
    @pytest.mark.asyncio
    async def test_mark_read(self, unit_env):
        service = await unit_env.get(NotificationService)
        notification = service.create_friend_request(BOB, ALICE, "Alice")

        updated = service.mark_read(BOB, notification.id)

        assert updated.is_read is True
        assert service.unread_count(BOB) == 0

    @pytest.mark.asyncio
    async def test_get_from_another_feed_is_not_found(self, unit_env):
        service = await unit_env.get(NotificationService)
        notification = service.create_friend_request(BOB, ALICE, "Alice")

        with pytest.raises(NotFoundError):
            service.get(UserId("user-carol"), notification.id)

    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        service = await unit_env.get(NotificationService)
        notification = service.create_friend_request(BOB, ALICE, "Alice")

        assert service.delete(BOB, notification.id) is True
        assert service.delete(BOB, notification.id) is False
        assert service.list_for(BOB) == []


class TestPendingFriendRequests:
    """Tests for friend requests held until the recipient signs up."""

    @pytest.mark.asyncio
    async def test_deliver_turns_markers_into_notifications(self, unit_env):
        service = await unit_env.get(NotificationService)
        email = EmailAddress("bob@example.com")
        service.register_pending_friend_request(email, ALICE, "Alice")
        service.register_pending_friend_request(email, UserId("user-carol"), "Carol")

        delivered = service.deliver_pending_friend_requests(
            email, BOB, avatars={ALICE: "https://storage.test/a.png"}
        )

        assert {n.inviter_id for n in delivered} == {ALICE, "user-carol"}
        assert service.pending_friend_requests(email) == []
        alice_request = next(n for n in delivered if n.inviter_id == ALICE)
        assert alice_request.avatar == "https://storage.test/a.png"

    @pytest.mark.asyncio
    async def test_marker_per_inviter_is_replaced(self, unit_env):
        service = await unit_env.get(NotificationService)
        email = EmailAddress("bob@example.com")

        service.register_pending_friend_request(email, ALICE, "Alice")
        service.register_pending_friend_request(email, ALICE, "Alice Smith")

        markers = service.pending_friend_requests(email)
        assert [m.inviter_name for m in markers] == ["Alice Smith"]

    @pytest.mark.asyncio
    async def test_self_marker_is_skipped(self, unit_env):
        service = await unit_env.get(NotificationService)
        email = EmailAddress("bob@example.com")
        service.register_pending_friend_request(email, BOB, "Bob")

        assert service.deliver_pending_friend_requests(email, BOB) == []
        assert service.pending_friend_requests(email) == []

    @pytest.mark.asyncio
    async def test_withdraw_drops_only_that_inviter(self, unit_env):
        service = await unit_env.get(NotificationService)
        email = EmailAddress("bob@example.com")
        service.register_pending_friend_request(email, ALICE, "Alice")
        service.register_pending_friend_request(email, UserId("user-carol"), "Carol")

        service.withdraw_friend_request(email, ALICE)

        assert [m.inviter_id for m in service.pending_friend_requests(email)] == ["user-carol"]

    @pytest.mark.asyncio
    async def test_delivery_stops_when_feed_unwritable(self, unit_env):
        markers = await unit_env.get(PendingFriendRequestRepository)
        service = NotificationService(UnwritableNotificationRepository(), markers)
        email = EmailAddress("bob@example.com")
        service.register_pending_friend_request(email, ALICE, "Alice")

        assert service.deliver_pending_friend_requests(email, BOB) == []
        assert [m.inviter_id for m in service.pending_friend_requests(email)] == [ALICE]


class TestUnwritableFeed:
    @pytest.mark.asyncio
    async def test_delete_reports_nothing_removed(self, unit_env):
        markers = await unit_env.get(PendingFriendRequestRepository)
        service = NotificationService(UnwritableNotificationRepository(), markers)

        assert service.delete(BOB, NotificationId("notif_1_abcd")) is False
