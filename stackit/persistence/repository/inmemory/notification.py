"""In-memory notification repository for testing."""

from typing import Optional

from stackit.domain.model.notification import Notification
from stackit.domain.repository.notification import NotificationRepository
from stackit.domain.value import NotificationId, UserId

from .store import InMemoryStore


class InMemoryNotificationRepository(NotificationRepository):
    """In-memory implementation of NotificationRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _notifications(self) -> dict[NotificationId, Notification]:
        return self._store.notifications

    def _for(self, recipient_id: UserId, unread_only: bool) -> list[Notification]:
        notifications = [
            n for n in self._notifications.values() if n.recipient_id == recipient_id
        ]
        if unread_only:
            notifications = [n for n in notifications if not n.is_read]
        return notifications

    async def save(self, notification: Notification) -> Notification:
        """Store a notification."""
        self._notifications[notification.id] = notification
        return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        return self._notifications.get(notification_id)

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Notification]:
        """Find a user's notifications, newest first."""
        notifications = self._for(recipient_id, unread_only)
        notifications.sort(key=lambda n: n.created_at, reverse=True)
        return notifications[offset : offset + limit]

    async def count_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False
    ) -> int:
        """Count a user's notifications."""
        return len(self._for(recipient_id, unread_only))

    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set the read flag."""
        notification = self._notifications.get(notification_id)
        if notification is None:
            return None
        updated = notification.model_copy(update={"is_read": True})
        self._notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Set the read flag on all unread notifications of a user."""
        unread = self._for(recipient_id, unread_only=True)
        for notification in unread:
            self._notifications[notification.id] = notification.model_copy(
                update={"is_read": True}
            )
        return len(unread)

    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a notification."""
        self._notifications.pop(notification_id, None)

    async def delete_by_recipient(self, recipient_id: UserId) -> int:
        """Delete all of a user's notifications."""
        doomed = self._for(recipient_id, unread_only=False)
        for notification in doomed:
            del self._notifications[notification.id]
        return len(doomed)
