"""InstrumentationBridge: maps producer events onto tracker operations."""

from datetime import datetime, timezone
from typing import Any, Protocol

from ..errors import InvalidEventError
from ..event_bus import IEventBus
from ..logging_config import get_logger
from ..models import BusMessage, NodeType, Topic
from ..registry import TrackerRegistry

logger = get_logger(__name__)

# Topics whose events append to a log channel: topic -> tracker method
_LOG_TOPICS = {
    Topic.OBSERVE: "add_observe_log",
    Topic.ACTION: "add_action_log",
    Topic.PATCH: "add_patch",
    Topic.SNAPSHOT: "add_snapshot",
}


class IInstrumentationBridge(Protocol):
    """Delivers events of the monitored process to trackers."""

    async def start(self) -> None:
        """Subscribe to all EventBus topics."""
        ...

    async def stop(self) -> None:
        """Stop the bridge."""
        ...


class InstrumentationBridge:
    """
    Applies instrumentation events published on the EventBus to trackers.

    Payload keys by topic:
        register: tracker_id, name, node_type
        actions:  tracker_id, actions (list of names)
        observe / action / patch / snapshot: tracker_id, value, payload
        value:    tracker_id, value
        updated:  tracker_id, timestamp (ISO string, optional)
    """

    def __init__(self, event_bus: IEventBus, registry: TrackerRegistry):
        self._event_bus = event_bus
        self._registry = registry

    async def start(self) -> None:
        """Subscribe to all EventBus topics."""
        for topic in Topic:
            self._event_bus.subscribe(topic, self._handle_bus_message)

    async def stop(self) -> None:
        """Stop bridge (no-op, the bus has no unsubscribe)."""
        return

    async def _handle_bus_message(self, bus_message: BusMessage) -> None:
        """Handle incoming BusMessage from EventBus."""
        self.dispatch(bus_message.topic, bus_message.payload)

    def validate(self, topic: Topic, payload: Any) -> None:
        """Raise InvalidEventError/TrackerNotFoundError for unusable events."""
        if not isinstance(payload, dict):
            raise InvalidEventError("payload must be an object")

        tracker_id = payload.get("tracker_id")
        if not tracker_id:
            raise InvalidEventError(f"{topic.value} event without tracker_id")

        if topic == Topic.REGISTER:
            self._node_type(payload)
            return

        self._registry.get(tracker_id)

        if topic == Topic.ACTIONS:
            actions = payload.get("actions")
            if actions is not None and (
                not isinstance(actions, list)
                or not all(isinstance(name, str) for name in actions)
            ):
                raise InvalidEventError("actions must be a list of names")
        elif topic == Topic.UPDATED:
            self._timestamp(payload)

    def dispatch(self, topic: Topic, payload: dict) -> None:
        """Apply one event to its tracker."""
        self.validate(topic, payload)
        tracker_id = payload["tracker_id"]

        if topic == Topic.REGISTER:
            self._registry.register(
                tracker_id,
                name=payload.get("name") or "",
                node_type=self._node_type(payload),
            )
            return

        tracker = self._registry.get(tracker_id)

        if topic in _LOG_TOPICS:
            add = getattr(tracker, _LOG_TOPICS[topic])
            add(payload.get("value"), payload.get("payload"))
        elif topic == Topic.ACTIONS:
            tracker.add_actions(payload.get("actions"))
        elif topic == Topic.VALUE:
            tracker.set_value(payload.get("value"))
        elif topic == Topic.UPDATED:
            tracker.set_updated_time(self._timestamp(payload))

        logger.debug(
            "Event applied",
            extra={"context": {"tracker_id": tracker_id, "topic": topic.value}},
        )

    @staticmethod
    def _node_type(payload: dict) -> NodeType:
        raw = payload.get("node_type", NodeType.PLAIN_VALUE)
        try:
            return NodeType(raw)
        except ValueError:
            raise InvalidEventError(f"unknown node_type: {raw!r}")

    @staticmethod
    def _timestamp(payload: dict) -> datetime:
        raw = payload.get("timestamp")
        if not raw:
            return datetime.now(timezone.utc)
        try:
            return datetime.fromisoformat(raw)
        except (TypeError, ValueError):
            raise InvalidEventError(f"invalid timestamp: {raw!r}")
