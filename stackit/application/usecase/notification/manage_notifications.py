"""Notification read-flag and deletion use cases."""

from uuid import UUID

from pydantic import BaseModel

from stackit.domain.service import NotificationService
from stackit.domain.value import NotificationId, UserId

from .list_notifications import NotificationItem


class NotificationActionRequest(BaseModel):
    """Request addressing one of the user's notifications."""

    notification_id: str
    user_id: str  # User ID from authenticated user


class BulkNotificationRequest(BaseModel):
    """Request addressing all of the user's notifications."""

    user_id: str


class BulkNotificationResponse(BaseModel):
    """Number of notifications affected."""

    count: int


class DeleteNotificationResponse(BaseModel):
    """Delete notification response."""

    notification_id: str
    deleted: bool


class MarkNotificationReadUseCase:
    """Use case for marking one notification as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize mark read use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: NotificationActionRequest) -> NotificationItem:
        """Execute mark read flow.

        Raises:
            NotFoundError: If the notification doesn't exist or isn't the
                user's
        """
        notification = await self.notification_service.mark_read(
            NotificationId(UUID(request.notification_id)),
            UserId(UUID(request.user_id)),
        )
        return NotificationItem.from_notification(notification)


class MarkAllNotificationsReadUseCase:
    """Use case for marking all of a user's notifications as read."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: BulkNotificationRequest) -> BulkNotificationResponse:
        count = await self.notification_service.mark_all_read(
            UserId(UUID(request.user_id))
        )
        return BulkNotificationResponse(count=count)


class DeleteNotificationUseCase:
    """Use case for deleting one notification."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(
        self, request: NotificationActionRequest
    ) -> DeleteNotificationResponse:
        """Execute delete flow.

        Raises:
            NotFoundError: If the notification doesn't exist or isn't the
                user's
        """
        await self.notification_service.delete_notification(
            NotificationId(UUID(request.notification_id)),
            UserId(UUID(request.user_id)),
        )
        return DeleteNotificationResponse(
            notification_id=request.notification_id, deleted=True
        )


class DeleteAllNotificationsUseCase:
    """Use case for clearing a user's notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: BulkNotificationRequest) -> BulkNotificationResponse:
        count = await self.notification_service.delete_all(UserId(UUID(request.user_id)))
        return BulkNotificationResponse(count=count)
