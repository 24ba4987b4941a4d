"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from inspector.models import (
    ActionSpec,
    BusMessage,
    LogChannel,
    LogEntry,
    NodeType,
    Recording,
    Topic,
    TrackerChange,
    TrackerLogs,
)


class TestNodeType:
    """Tests for NodeType enum."""

    def test_client_codes(self):
        """Test the integer codes sent by instrumented clients."""
        assert NodeType(0) is NodeType.REACTIVE_OBSERVABLE
        assert NodeType(1) is NodeType.STATE_TREE_NODE
        assert NodeType(2) is NodeType.PLAIN_VALUE


class TestActionSpec:
    """Tests for ActionSpec model."""

    def test_default_arguments(self):
        action = ActionSpec(name="addTodo")
        assert action.arguments == "[]"


class TestLogEntry:
    """Tests for LogEntry model."""

    def test_create_entry(self):
        payload = {"op": "add"}
        entry = LogEntry(display_number=1, value=payload)
        assert entry.display_number == 1
        assert entry.value is payload
        assert entry.is_expanded is False
        assert entry.time is None


class TestRecording:
    """Tests for Recording model."""

    def test_default_name(self):
        assert Recording(recording_id="r1").name == "Un-named"


class TestTrackerLogs:
    """Tests for TrackerLogs model."""

    def test_channel_lookup(self):
        logs = TrackerLogs()
        assert logs.channel(LogChannel.PATCHES) is logs.patches
        assert logs.channel("snapshots") is logs.snapshots
        assert logs.channel(LogChannel.ACTION_LOGS) is logs.action_logs

    def test_unknown_channel(self):
        with pytest.raises(ValueError):
            TrackerLogs().channel("unknown")

    def test_clear(self):
        logs = TrackerLogs()
        logs.action_logs.append(LogEntry(display_number=1, value="a"))
        logs.patches.append(LogEntry(display_number=1, value="p"))
        logs.snapshots.append(LogEntry(display_number=1, value="s"))

        logs.clear()

        assert logs == TrackerLogs()


class TestTrackerChange:
    """Tests for TrackerChange model."""

    def test_frozen(self):
        change = TrackerChange(tracker_id="t", fields=("name",), version=1)
        with pytest.raises(AttributeError):
            change.version = 2  # type: ignore


class TestBusMessage:
    """Tests for BusMessage model."""

    def test_create_bus_message(self):
        ts = datetime.now(timezone.utc)
        msg = BusMessage(
            id="bus1",
            topic=Topic.PATCH,
            payload={"tracker_id": "t"},
            source="bridge",
            timestamp=ts,
        )
        assert msg.topic == "patch"
        assert msg.payload == {"tracker_id": "t"}
        assert msg.timestamp == ts
