"""Unit tests for the Activity Hub."""

import pytest

from authshield.core.types import ConfidenceLevel
from authshield.data.schemas.alert import ActivityEvent
from authshield.governance.events.hub import ActivityHub, ActivityListener


class RecordingListener:
    def __init__(self):
        self.messages = []
        self.is_open = True

    def send(self, message):
        self.messages.append(message)


@pytest.fixture
def event():
    return ActivityEvent(
        user_id="user_1",
        risk_score=0.42,
        confidence_level=ConfidenceLevel.MEDIUM,
        message="Risk score calculated for user user_1",
    )


class TestActivityHub:
    """Synchronous delivery."""

    def test_envelope_shape(self, event):
        """Listeners receive a typed activity envelope."""
        hub = ActivityHub()
        listener = RecordingListener()
        hub.subscribe(listener)

        hub.publish(event)

        message = listener.messages[0]
        assert message["type"] == "activity"
        assert message["activity"]["type"] == "risk_calculated"
        assert message["activity"]["user_id"] == "user_1"
        assert message["activity"]["risk_score"] == 0.42
        assert message["activity"]["confidence_level"] == "medium"
        assert "timestamp" in message["activity"]

    def test_closed_listener_is_dropped(self, event):
        hub = ActivityHub()
        listener = RecordingListener()
        listener.is_open = False
        hub.subscribe(listener)

        hub.publish(event)

        assert listener.messages == []
        assert hub.listener_count == 0

    def test_unsubscribe(self, event):
        hub = ActivityHub()
        listener = RecordingListener()
        hub.subscribe(listener)
        hub.unsubscribe(listener)

        hub.publish(event)

        assert listener.messages == []

    def test_publish_without_listeners(self, event):
        """Publishing to nobody is fine."""
        hub = ActivityHub()
        hub.publish(event)
        assert hub.get_stats()["events_delivered"] == 1

    def test_listener_protocol(self):
        assert isinstance(RecordingListener(), ActivityListener)


class TestBackgroundDelivery:
    """Queued delivery on a daemon thread."""

    def test_shutdown_flushes_queue(self, event):
        hub = ActivityHub(background=True)
        listener = RecordingListener()
        hub.subscribe(listener)

        for _ in range(5):
            hub.publish(event)
        hub.shutdown()

        assert len(listener.messages) == 5
        stats = hub.get_stats()
        assert stats["events_delivered"] == 5
        assert stats["events_dropped"] == 0

    def test_publish_after_shutdown_delivers_inline(self, event):
        hub = ActivityHub(background=True)
        hub.shutdown()
        listener = RecordingListener()
        hub.subscribe(listener)

        hub.publish(event)

        assert len(listener.messages) == 1
