"""Notification repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from stackit.domain.model.notification import Notification
from stackit.domain.value import NotificationId, UserId


class NotificationRepository(ABC):
    """Repository for Notification entity.

    Notifications are append-only apart from the read flag.
    """

    @abstractmethod
    async def save(self, notification: Notification) -> Notification:
        """Persist a new notification."""
        pass

    @abstractmethod
    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        pass

    @abstractmethod
    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first.

        Args:
            recipient_id: The recipient's ID
            unread_only: Only return unread notifications
            limit: Maximum number of notifications
            offset: Number of notifications to skip

        Returns:
            List of notifications
        """
        pass

    @abstractmethod
    async def count_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False
    ) -> int:
        """Count a user's notifications."""
        pass

    @abstractmethod
    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set the read flag.

        Returns:
            The updated notification, None if it doesn't exist
        """
        pass

    @abstractmethod
    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Set the read flag on all of a user's unread notifications.

        Returns:
            Number of notifications updated
        """
        pass

    @abstractmethod
    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a notification."""
        pass

    @abstractmethod
    async def delete_by_recipient(self, recipient_id: UserId) -> int:
        """Delete all of a user's notifications.

        Returns:
            Number of notifications deleted
        """
        pass
