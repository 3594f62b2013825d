"""Notification use cases."""

from .list_notifications import (
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    NotificationItem,
    UnreadCountRequest,
    UnreadCountResponse,
)
from .manage_notifications import (
    BulkNotificationRequest,
    BulkNotificationResponse,
    DeleteAllNotificationsUseCase,
    DeleteNotificationResponse,
    DeleteNotificationUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    NotificationActionRequest,
)

__all__ = [
    "BulkNotificationRequest",
    "BulkNotificationResponse",
    "DeleteAllNotificationsUseCase",
    "DeleteNotificationResponse",
    "DeleteNotificationUseCase",
    "GetUnreadCountUseCase",
    "ListNotificationsRequest",
    "ListNotificationsResponse",
    "ListNotificationsUseCase",
    "MarkAllNotificationsReadUseCase",
    "MarkNotificationReadUseCase",
    "NotificationActionRequest",
    "NotificationItem",
    "UnreadCountRequest",
    "UnreadCountResponse",
]
