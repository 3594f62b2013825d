"""Notification sink implementations.

Transport-level delivery (websockets, push) is out of scope; the production
sink records each publish through logfire so it can be traced, and the
recording sink keeps events in memory for tests.
"""

from typing import Any

import logfire

from stackit.adapter.error import AdapterError
from stackit.domain.service.notification_service import NotificationSink
from stackit.domain.value import UserId


class LoggingNotificationSink(NotificationSink):
    """Sink that emits every published event as a logfire event."""

    async def publish(self, user_id: UserId, event: dict[str, Any]) -> None:
        """Publish an event to a user's channel."""
        logfire.info(
            "Notification published",
            channel=f"user:{user_id}",
            event_type=event.get("type"),
            event=event,
        )


class RecordingNotificationSink(NotificationSink):
    """Sink that keeps published events in memory.

    Attributes:
        published: (user_id, event) pairs in publish order
        fail: When set, every publish raises AdapterError
    """

    def __init__(self) -> None:
        self.published: list[tuple[UserId, dict[str, Any]]] = []
        self.fail = False

    async def publish(self, user_id: UserId, event: dict[str, Any]) -> None:
        """Record an event, or raise when failure is switched on."""
        if self.fail:
            raise AdapterError("Notification sink unavailable")
        self.published.append((user_id, event))

    def events_for(self, user_id: UserId) -> list[dict[str, Any]]:
        """Return the events published to one user."""
        return [event for uid, event in self.published if uid == user_id]

    def clear(self) -> None:
        """Forget every recorded event."""
        self.published.clear()
