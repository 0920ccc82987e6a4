"""Notification use cases."""

from mingle.application.usecase.notification.get_notifications import (
    GetNotificationsRequest,
    GetNotificationsResponse,
    GetNotificationsUseCase,
)
from mingle.application.usecase.notification.item import NotificationItem
from mingle.application.usecase.notification.mark_notification_read import (
    MarkNotificationReadRequest,
    MarkNotificationReadResponse,
    MarkNotificationReadUseCase,
)
from mingle.application.usecase.notification.respond_to_friend_request import (
    RespondToFriendRequestRequest,
    RespondToFriendRequestResponse,
    RespondToFriendRequestUseCase,
)
from mingle.application.usecase.notification.send_friend_request import (
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)

__all__ = [
    "GetNotificationsRequest",
    "GetNotificationsResponse",
    "GetNotificationsUseCase",
    "MarkNotificationReadRequest",
    "MarkNotificationReadResponse",
    "MarkNotificationReadUseCase",
    "NotificationItem",
    "RespondToFriendRequestRequest",
    "RespondToFriendRequestResponse",
    "RespondToFriendRequestUseCase",
    "SendFriendRequestRequest",
    "SendFriendRequestUseCase",
]
