"""PostgreSQL implementation of Notification repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from stackit.domain.model import Notification
from stackit.domain.repository import NotificationRepository
from stackit.domain.value import NotificationId, UserId
from stackit.persistence.mappers import notification_to_dict, row_to_notification
from stackit.persistence.tables import notifications_table


class PostgresNotificationRepository(NotificationRepository):
    """PostgreSQL implementation of NotificationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, notification: Notification) -> Notification:
        """Insert a notification inside a savepoint.

        A failed insert rolls back to the savepoint only, leaving the
        request's transaction usable for the action that triggered it.
        """
        with logfire.span(
            "notification_repository.save",
            notification_id=str(notification.id),
            type=notification.type.value,
        ):
            async with self.session.begin_nested():
                stmt = notifications_table.insert().values(
                    **notification_to_dict(notification)
                )
                await self.session.execute(stmt)
            return notification

    async def find_by_id(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Find a notification by ID."""
        stmt = select(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_notification(row._asdict()) if row else None

    async def find_by_recipient(
        self,
        recipient_id: UserId,
        unread_only: bool = False,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Notification]:
        """Find a user's notifications, newest first."""
        stmt = select(notifications_table).where(
            notifications_table.c.recipient_id == recipient_id
        )
        if unread_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(False))
        stmt = (
            stmt.order_by(desc(notifications_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_notification(row._asdict()) for row in result.fetchall()]

    async def count_by_recipient(
        self, recipient_id: UserId, unread_only: bool = False
    ) -> int:
        """Count a user's notifications."""
        stmt = (
            select(func.count())
            .select_from(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
        )
        if unread_only:
            stmt = stmt.where(notifications_table.c.is_read.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def mark_read(
        self, notification_id: NotificationId
    ) -> Optional[Notification]:
        """Set the read flag."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.id == notification_id)
            .values(is_read=True)
            .returning(notifications_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_notification(row._asdict()) if row else None

    async def mark_all_read(self, recipient_id: UserId) -> int:
        """Set the read flag on all unread notifications of a user."""
        stmt = (
            update(notifications_table)
            .where(notifications_table.c.recipient_id == recipient_id)
            .where(notifications_table.c.is_read.is_(False))
            .values(is_read=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]

    async def delete(self, notification_id: NotificationId) -> None:
        """Delete a notification."""
        stmt = delete(notifications_table).where(
            notifications_table.c.id == notification_id
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_by_recipient(self, recipient_id: UserId) -> int:
        """Delete all of a user's notifications."""
        stmt = delete(notifications_table).where(
            notifications_table.c.recipient_id == recipient_id
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]
