"""Notification feed domain service."""

import secrets
import time

import logfire

from mingle.domain.error import CacheError, NotFoundError
from mingle.domain.model.notification import Notification, PendingFriendRequest
from mingle.domain.repository import (
    NotificationRepository,
    PendingFriendRequestRepository,
)
from mingle.domain.value import EmailAddress, NotificationId, TextAvatar, UserId

from .base import Service

FRIEND_REQUEST_DESCRIPTION = "Wants to connect with you"


def new_notification_id() -> NotificationId:
    """Millisecond timestamp plus a short random suffix."""
    return NotificationId(f"notif_{int(time.time() * 1000)}_{secrets.token_hex(4)}")


class NotificationService(Service):
    """Domain service for per-recipient notification feeds.

    Feeds live in the local cache, so every operation is synchronous.
    """

    def __init__(
        self,
        notification_repository: NotificationRepository,
        pending_request_repository: PendingFriendRequestRepository,
    ) -> None:
        """Initialize notification service.

        Args:
            notification_repository: Cache-backed feeds
            pending_request_repository: Friend requests keyed by recipient email
        """
        self.notification_repository = notification_repository
        self.pending_request_repository = pending_request_repository

    def create(self, recipient_id: UserId, notification: Notification) -> Notification:
        """Prepend a notification to the recipient's feed."""
        if notification.recipient_id != recipient_id:
            notification = notification.model_copy(update={"recipient_id": recipient_id})
        self.notification_repository.add(notification)
        logfire.info(
            "Notification created",
            recipient_id=str(recipient_id),
            notification_id=notification.id,
            is_friend_request=notification.is_friend_request,
        )
        return notification

    def list_for(self, recipient_id: UserId) -> list[Notification]:
        """Notifications for a recipient, newest first.

        An unreadable feed reads as empty.
        """
        try:
            return self.notification_repository.list_for(recipient_id)
        except CacheError as e:
            logfire.warn("Notification feed unreadable", recipient_id=str(recipient_id), error=str(e))
            return []

    def get(self, recipient_id: UserId, notification_id: NotificationId) -> Notification:
        """Get one notification from a recipient's feed.

        Raises:
            NotFoundError: If the feed has no such notification
        """
        for notification in self.list_for(recipient_id):
            if notification.id == notification_id:
                return notification
        raise NotFoundError("Notification", notification_id)

    def mark_read(self, recipient_id: UserId, notification_id: NotificationId) -> Notification:
        """Mark a notification as read.

        Raises:
            NotFoundError: If the feed has no such notification
        """
        notification = self.get(recipient_id, notification_id)
        if notification.is_read:
            return notification
        updated = notification.model_copy(update={"is_read": True})
        self.notification_repository.replace(updated)
        return updated

    def delete(self, recipient_id: UserId, notification_id: NotificationId) -> bool:
        """Delete a notification. Returns whether it existed.

        An unwritable feed is logged and reads as not removed.
        """
        try:
            removed = self.notification_repository.delete(recipient_id, notification_id)
        except CacheError as e:
            logfire.warn(
                "Notification delete failed",
                recipient_id=str(recipient_id),
                notification_id=notification_id,
                error=str(e),
            )
            return False
        if removed:
            logfire.info(
                "Notification deleted",
                recipient_id=str(recipient_id),
                notification_id=notification_id,
            )
        return removed

    def unread_count(self, recipient_id: UserId) -> int:
        return sum(1 for n in self.list_for(recipient_id) if not n.is_read)

    def create_friend_request(
        self,
        recipient_id: UserId,
        inviter_id: UserId,
        inviter_name: str,
        avatar: str | None = None,
    ) -> Notification:
        """Emit a friend-request notification.

        At most one outstanding request per (recipient, inviter): an existing
        one is returned unchanged.

        Args:
            recipient_id: User receiving the request
            inviter_id: User asking to connect
            inviter_name: Inviter's display name
            avatar: Inviter's avatar URL, if resolvable

        Returns:
            The new or existing notification
        """
        with logfire.span(
            "notification_service.create_friend_request",
            recipient_id=str(recipient_id),
            inviter_id=str(inviter_id),
        ):
            for existing in self.list_for(recipient_id):
                if existing.is_friend_request and existing.inviter_id == inviter_id:
                    logfire.info(
                        "Friend request already outstanding",
                        notification_id=existing.id,
                    )
                    return existing

            notification = Notification(
                id=new_notification_id(),
                recipient_id=recipient_id,
                title=f"{inviter_name} sent you a friend request.",
                description=FRIEND_REQUEST_DESCRIPTION,
                avatar=avatar,
                text_avatar=None if avatar else TextAvatar.for_name(inviter_name),
                is_friend_request=True,
                inviter_id=inviter_id,
                inviter_name=inviter_name,
            )
            return self.create(recipient_id, notification)

    def register_pending_friend_request(
        self,
        recipient_email: EmailAddress,
        inviter_id: UserId,
        inviter_name: str,
        inviter_avatar: str | None = None,
    ) -> PendingFriendRequest:
        """Remember a friend request for an email that may not be a user yet."""
        marker = PendingFriendRequest(
            recipient_email=recipient_email,
            inviter_id=inviter_id,
            inviter_name=inviter_name,
            inviter_avatar=inviter_avatar,
        )
        self.pending_request_repository.add(marker)
        logfire.info(
            "Pending friend request recorded",
            recipient_email=recipient_email.root,
            inviter_id=str(inviter_id),
        )
        return marker

    def pending_friend_requests(self, email: EmailAddress) -> list[PendingFriendRequest]:
        try:
            return self.pending_request_repository.list_for(email)
        except CacheError as e:
            logfire.warn("Pending friend requests unreadable", email=email.root, error=str(e))
            return []

    def deliver_pending_friend_requests(
        self,
        email: EmailAddress,
        user_id: UserId,
        avatars: dict[UserId, str | None] | None = None,
    ) -> list[Notification]:
        """Turn markers for ``email`` into notifications for ``user_id``.

        Markers are cleared afterwards. The feed dedups against requests
        already delivered for the same inviter. A cache failure stops
        delivery and leaves the markers in place.

        Args:
            email: Recipient email the markers were recorded under
            user_id: The recipient's user id
            avatars: Resolved avatar URLs per inviter, when known

        Returns:
            Notifications now in the feed for each marker
        """
        avatars = avatars or {}
        markers = self.pending_friend_requests(email)
        delivered = []
        try:
            for marker in markers:
                if marker.inviter_id == user_id:
                    continue
                delivered.append(
                    self.create_friend_request(
                        recipient_id=user_id,
                        inviter_id=marker.inviter_id,
                        inviter_name=marker.inviter_name,
                        avatar=avatars.get(marker.inviter_id),
                    )
                )
            if markers:
                self.pending_request_repository.clear(email)
        except CacheError as e:
            logfire.warn(
                "Pending friend request delivery incomplete",
                email=email.root,
                user_id=str(user_id),
                error=str(e),
            )
            return delivered
        if markers:
            logfire.info(
                "Pending friend requests delivered",
                email=email.root,
                user_id=str(user_id),
                count=len(delivered),
            )
        return delivered

    def withdraw_friend_request(
        self,
        recipient_email: EmailAddress,
        inviter_id: UserId,
        recipient_id: UserId | None = None,
    ) -> None:
        """Take back a friend request whose invitation was closed.

        Drops the inviter's marker for the email and, when the recipient is
        already a user, the inviter's outstanding friend request in their
        feed. Cache failures are logged.
        """
        try:
            marker_removed = self.pending_request_repository.remove(recipient_email, inviter_id)
        except CacheError as e:
            logfire.warn(
                "Pending friend request not withdrawn",
                recipient_email=recipient_email.root,
                inviter_id=str(inviter_id),
                error=str(e),
            )
            marker_removed = False

        removed = 0
        if recipient_id is not None:
            for notification in self.list_for(recipient_id):
                if notification.is_friend_request and notification.inviter_id == inviter_id:
                    removed += self.delete(recipient_id, notification.id)

        logfire.info(
            "Friend request withdrawn",
            recipient_email=recipient_email.root,
            inviter_id=str(inviter_id),
            marker_removed=marker_removed,
            notifications_removed=removed,
        )
