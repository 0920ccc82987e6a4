"""Get notifications use case."""

from pydantic import BaseModel

from mingle.application.usecase.base import BaseUseCase
from mingle.application.usecase.notification.item import NotificationItem
from mingle.domain.service import NotificationService
from mingle.domain.value import UserId


class GetNotificationsRequest(BaseModel):
    user_id: str


class GetNotificationsResponse(BaseModel):
    notifications: list[NotificationItem]
    unread_count: int


class GetNotificationsUseCase(BaseUseCase):
    """Use case for reading the caller's notification feed, newest first."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: GetNotificationsRequest) -> GetNotificationsResponse:
        user_id = UserId(request.user_id)
        notifications = self.notification_service.list_for(user_id)
        return GetNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in notifications],
            unread_count=sum(1 for n in notifications if not n.is_read),
        )
