"""Mark notification read use case."""

from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.notification.item import NotificationItem
from mingle.domain.service import NotificationService
from mingle.domain.value import NotificationId, UserId


class MarkNotificationReadRequest(BaseModel):
    user_id: str
    notification_id: str


class MarkNotificationReadResponse(BaseModel):
    notification: NotificationItem
    unread_count: int


class MarkNotificationReadUseCase(BaseUseCase):
    """Use case for marking one notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: MarkNotificationReadRequest
    ) -> MarkNotificationReadResponse:
        """Execute mark read use case.

        Raises:
            NotFoundError: If the caller's feed has no such notification
        """
        user_id = UserId(request.user_id)
        notification = self.notification_service.mark_read(
            user_id, NotificationId(request.notification_id)
        )
        return MarkNotificationReadResponse(
            notification=NotificationItem.from_notification(notification),
            unread_count=self.notification_service.unread_count(user_id),
        )
