"""Tests for InstrumentationBridge."""

from datetime import datetime, timezone

import pytest

from inspector.errors import InvalidEventError, TrackerNotFoundError
from inspector.models import BusMessage, NodeType, Topic


async def publish(event_bus, topic: Topic, payload: dict) -> None:
    await event_bus.publish(
        BusMessage(
            id="",
            topic=topic,
            payload=payload,
            source="test",
            timestamp=datetime.now(timezone.utc),
        )
    )


class TestBridgeSubscription:
    """Tests for bridge EventBus subscription."""

    @pytest.mark.asyncio
    async def test_subscribes_all_topics(self, bridge, event_bus):
        assert all(len(event_bus._subscribers[topic]) == 1 for topic in Topic)

    @pytest.mark.asyncio
    async def test_register_event(self, bridge, event_bus, registry):
        await publish(
            event_bus,
            Topic.REGISTER,
            {"tracker_id": "t1", "name": "Store", "node_type": 1},
        )

        tracker = registry.get("t1")
        assert tracker.name == "Store"
        assert tracker.node_type == NodeType.STATE_TREE_NODE

    @pytest.mark.asyncio
    async def test_full_event_flow(self, bridge, event_bus, registry):
        """Test a producer session from registration to snapshots."""
        await publish(event_bus, Topic.REGISTER, {"tracker_id": "t1", "name": "Store"})
        await publish(event_bus, Topic.ACTIONS, {"tracker_id": "t1", "actions": ["add", "remove"]})
        await publish(
            event_bus,
            Topic.ACTION,
            {"tracker_id": "t1", "value": {"n": 1}, "payload": {"name": "add"}},
        )
        await publish(
            event_bus,
            Topic.PATCH,
            {"tracker_id": "t1", "value": {"n": 1}, "payload": {"op": "replace"}},
        )
        await publish(
            event_bus,
            Topic.SNAPSHOT,
            {"tracker_id": "t1", "value": {"n": 1}, "payload": {"n": 1}},
        )
        await publish(
            event_bus,
            Topic.OBSERVE,
            {"tracker_id": "t1", "value": {"n": 2}, "payload": {"type": "update"}},
        )
        await publish(event_bus, Topic.VALUE, {"tracker_id": "t1", "value": {"n": 3}})

        tracker = registry.get("t1")
        assert [a.name for a in tracker.actions] == ["add", "remove"]
        assert [e.value for e in tracker.action_logs] == [{"type": "update"}, {"name": "add"}]
        assert tracker.patches[0].value == {"op": "replace"}
        assert tracker.snapshots[0].value == {"n": 1}
        assert tracker.value == {"n": 3}

    @pytest.mark.asyncio
    async def test_updated_event(self, bridge, event_bus, registry):
        registry.register("t1")
        await publish(
            event_bus,
            Topic.UPDATED,
            {"tracker_id": "t1", "timestamp": "2026-01-02T03:04:05+00:00"},
        )
        assert registry.get("t1").updated_on == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_updated_event_defaults_to_now(self, bridge, event_bus, registry):
        tracker = registry.register("t1")
        before = datetime.now(timezone.utc)
        await publish(event_bus, Topic.UPDATED, {"tracker_id": "t1"})
        assert tracker.updated_on >= before

    @pytest.mark.asyncio
    async def test_unknown_tracker_is_logged_not_raised(self, bridge, event_bus, registry):
        """Test that the bus swallows errors of a bad event."""
        await publish(event_bus, Topic.PATCH, {"tracker_id": "missing", "payload": {}})
        assert registry.all() == []


@pytest.fixture
def idle_bridge(event_bus, registry):
    """Bridge that is not subscribed to the bus."""
    from inspector.bridge import InstrumentationBridge

    return InstrumentationBridge(event_bus=event_bus, registry=registry)


class TestBridgeValidate:
    """Tests for InstrumentationBridge.validate()."""

    def test_missing_tracker_id(self, idle_bridge):
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.PATCH, {"payload": {}})

    def test_payload_not_object(self, idle_bridge):
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.PATCH, ["not", "a", "dict"])

    def test_unknown_tracker(self, idle_bridge):
        with pytest.raises(TrackerNotFoundError):
            idle_bridge.validate(Topic.SNAPSHOT, {"tracker_id": "missing"})

    def test_register_needs_no_tracker(self, idle_bridge):
        idle_bridge.validate(Topic.REGISTER, {"tracker_id": "new"})

    def test_register_unknown_node_type(self, idle_bridge):
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.REGISTER, {"tracker_id": "new", "node_type": 9})

    def test_actions_must_be_list(self, idle_bridge, registry):
        registry.register("t1")
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.ACTIONS, {"tracker_id": "t1", "actions": "add"})

    def test_action_names_must_be_strings(self, idle_bridge, registry):
        """Test that non-string action names are rejected before reaching the tracker."""
        tracker = registry.register("t1")
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.ACTIONS, {"tracker_id": "t1", "actions": [1, 2]})
        with pytest.raises(InvalidEventError):
            idle_bridge.dispatch(Topic.ACTIONS, {"tracker_id": "t1", "actions": ["add", None]})
        assert tracker.actions == []

    def test_invalid_timestamp(self, idle_bridge, registry):
        registry.register("t1")
        with pytest.raises(InvalidEventError):
            idle_bridge.validate(Topic.UPDATED, {"tracker_id": "t1", "timestamp": "yesterday"})

    def test_dispatch_missing_actions_keeps_registry(self, idle_bridge, registry):
        tracker = registry.register("t1")
        tracker.add_actions(["a"])
        idle_bridge.dispatch(Topic.ACTIONS, {"tracker_id": "t1"})
        assert [a.name for a in tracker.actions] == ["a"]
