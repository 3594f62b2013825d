"""List notifications use cases."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from stackit.config import PaginationSettings
from stackit.domain.model import Notification
from stackit.domain.service import NotificationService
from stackit.domain.value import NotificationType, UserId


class NotificationItem(BaseModel):
    """Notification as returned by the API."""

    notification_id: str
    type: NotificationType
    title: str
    message: str
    sender_id: str
    question_id: str | None
    answer_id: str | None
    comment_id: str | None
    metadata: dict[str, Any]
    is_read: bool
    created_at: datetime

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationItem":
        return cls(
            notification_id=str(notification.id),
            type=notification.type,
            title=notification.title,
            message=notification.message,
            sender_id=str(notification.sender_id),
            question_id=(
                str(notification.question_id) if notification.question_id else None
            ),
            answer_id=str(notification.answer_id) if notification.answer_id else None,
            comment_id=(
                str(notification.comment_id) if notification.comment_id else None
            ),
            metadata=notification.metadata,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class ListNotificationsRequest(BaseModel):
    """List notifications request."""

    user_id: str  # User ID from authenticated user
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)  # Configured default if omitted
    unread_only: bool = False


class ListNotificationsResponse(BaseModel):
    """List notifications response."""

    notifications: list[NotificationItem]
    total: int
    unread_count: int
    page: int
    limit: int
    pages: int


class ListNotificationsUseCase:
    """Use case for reading the current user's notifications."""

    def __init__(
        self, notification_service: NotificationService, pagination: PaginationSettings
    ) -> None:
        """Initialize list notifications use case.

        Args:
            notification_service: Notification domain service
            pagination: Page size limits
        """
        self.notification_service = notification_service
        self.pagination = pagination

    async def execute(
        self, request: ListNotificationsRequest
    ) -> ListNotificationsResponse:
        """Execute list notifications flow.

        Returns:
            One page of notifications, newest first, plus the unread count
        """
        user_id = UserId(UUID(request.user_id))
        limit = self.pagination.page_size(request.limit)
        items, total = await self.notification_service.list_notifications(
            user_id,
            page=request.page,
            limit=limit,
            unread_only=request.unread_only,
        )
        unread = await self.notification_service.unread_count(user_id)
        return ListNotificationsResponse(
            notifications=[NotificationItem.from_notification(n) for n in items],
            total=total,
            unread_count=unread,
            page=request.page,
            limit=limit,
            pages=(total + limit - 1) // limit,
        )


class UnreadCountRequest(BaseModel):
    """Unread count request."""

    user_id: str


class UnreadCountResponse(BaseModel):
    """Unread count response."""

    unread_count: int


class GetUnreadCountUseCase:
    """Use case for the notification badge count."""

    def __init__(self, notification_service: NotificationService) -> None:
        self.notification_service = notification_service

    async def execute(self, request: UnreadCountRequest) -> UnreadCountResponse:
        count = await self.notification_service.unread_count(
            UserId(UUID(request.user_id))
        )
        return UnreadCountResponse(unread_count=count)
