"""Notification item shared by notification use case responses."""

from datetime import datetime

from pydantic import BaseModel

from mingle.domain.model import Notification
from mingle.domain.value import TextAvatar


class NotificationItem(BaseModel):
    notification_id: str
    title: str
    description: str | None
    avatar: str | None
    text_avatar: TextAvatar | None
    created_at: datetime
    is_read: bool
    is_friend_request: bool
    inviter_id: str | None
    inviter_name: str | None

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=notification.id,
            title=notification.title,
            description=notification.description,
            avatar=notification.avatar,
            text_avatar=notification.text_avatar,
            created_at=notification.created_at,
            is_read=notification.is_read,
            is_friend_request=notification.is_friend_request,
            inviter_id=notification.inviter_id,
            inviter_name=notification.inviter_name,
        )
