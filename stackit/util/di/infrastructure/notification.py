"""Notification sink infrastructure providers."""

from dishka import Scope, provide

from stackit.adapter.notification import LoggingNotificationSink
from stackit.domain.service import NotificationSink
from stackit.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification sink component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification sink provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_sink(self) -> NotificationSink:
        """Provide the application-wide notification sink."""
        return LoggingNotificationSink()
