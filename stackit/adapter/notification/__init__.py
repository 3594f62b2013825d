"""Notification sink adapters."""

from .sink import LoggingNotificationSink, RecordingNotificationSink

__all__ = ["LoggingNotificationSink", "RecordingNotificationSink"]
