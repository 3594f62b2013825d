"""Tests for notification sinks."""

from uuid import uuid4

import pytest

from stackit.adapter.error import AdapterError
from stackit.adapter.notification import (
    LoggingNotificationSink,
    RecordingNotificationSink,
)
from stackit.domain.service import NotificationSink
from stackit.domain.value import UserId


@pytest.mark.asyncio
async def test_recording_sink_groups_by_user():
    sink = RecordingNotificationSink()
    alice, bob = UserId(uuid4()), UserId(uuid4())

    await sink.publish(alice, {"type": "a"})
    await sink.publish(bob, {"type": "b"})
    await sink.publish(alice, {"type": "c"})

    assert sink.events_for(alice) == [{"type": "a"}, {"type": "c"}]
    assert sink.events_for(bob) == [{"type": "b"}]

    sink.clear()
    assert sink.published == []


@pytest.mark.asyncio
async def test_recording_sink_failure_mode():
    sink = RecordingNotificationSink()
    sink.fail = True

    with pytest.raises(AdapterError):
        await sink.publish(UserId(uuid4()), {"type": "a"})
    assert sink.published == []


@pytest.mark.asyncio
async def test_logging_sink_accepts_events():
    await LoggingNotificationSink().publish(UserId(uuid4()), {"type": "a"})


def test_sink_interface_requires_publish():
    class Silent(NotificationSink):
        pass

    with pytest.raises(TypeError):
        NotificationSink()  # type: ignore[abstract]
    with pytest.raises(TypeError):
        Silent()  # type: ignore[abstract]
