"""Tracker: per-entity state and event log of a monitored value."""

import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Protocol

from ..errors import LogEntryNotFoundError, RecordingNotFoundError
from ..logging_config import get_logger
from ..models import (
    ActionSpec,
    LogChannel,
    LogEntry,
    NodeType,
    Recording,
    TrackerChange,
    TrackerLogs,
)

logger = get_logger(__name__)


TrackerObserver = Callable[[TrackerChange], None]


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_log_time(moment: datetime) -> str:
    """Human-readable log time, e.g. 'Monday, October 19th 2026, 3:04:05 pm'."""
    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return (
        f"{moment:%A}, {moment:%B} {_ordinal(moment.day)} {moment.year}, "
        f"{hour}:{moment:%M:%S} {meridiem}"
    )


class ITracker(Protocol):
    """Operations the instrumentation bridge drives on a tracker."""

    def add_actions(self, action_names: Iterable[str] | None) -> None:
        """Replace the action registry."""
        ...

    def add_observe_log(self, value: Any, description: Any) -> None:
        """Record an observed value change."""
        ...

    def add_action_log(self, value: Any, action_meta: Any) -> None:
        """Record an invoked action."""
        ...

    def add_patch(self, value: Any, patch: Any) -> None:
        """Record a structural patch."""
        ...

    def add_snapshot(self, value: Any, snapshot: Any) -> None:
        """Record a full-state snapshot."""
        ...

    def set_value(self, value: Any) -> None:
        """Replace the cached value."""
        ...

    def set_updated_time(self, timestamp: datetime) -> None:
        """Replace the last-updated timestamp."""
        ...


class Tracker:
    """
    State of one monitored entity inside the dashboard.

    Holds the action registry with the operator's selection, three
    newest-first log channels, the recordings registry and the latest
    observed value. Every public mutation runs under the tracker lock and
    notifies observers before the lock is released.
    """

    def __init__(
        self,
        tracker_id: str,
        name: str = "",
        node_type: NodeType | int = NodeType.PLAIN_VALUE,
    ):
        self._id = tracker_id
        self._node_type = NodeType(node_type)
        self._name = name
        self._updated_on = datetime.now(timezone.utc)
        self._value: Any = {}
        self._actions: list[ActionSpec] = []
        self._selected_action_index = 0
        self._selected_tab = 0
        self._logs = TrackerLogs()
        self._recordings: list[Recording] = []

        self._version = 0
        self._observers: list[TrackerObserver] = []
        self._lock = threading.RLock()

    # Read-only views

    @property
    def id(self) -> str:
        return self._id

    @property
    def node_type(self) -> NodeType:
        return self._node_type

    @property
    def name(self) -> str:
        return self._name

    @property
    def updated_on(self) -> datetime:
        return self._updated_on

    @property
    def value(self) -> Any:
        return self._value

    @property
    def actions(self) -> list[ActionSpec]:
        return list(self._actions)

    @property
    def selected_action_index(self) -> int:
        return self._selected_action_index

    @property
    def selected_tab(self) -> int:
        return self._selected_tab

    @property
    def action_arguments(self) -> str:
        """Arguments of the selected action, or "" when nothing is selected."""
        action = self._selected_action()
        return action.arguments if action else ""

    @property
    def logs(self) -> TrackerLogs:
        with self._lock:
            return TrackerLogs(
                action_logs=list(self._logs.action_logs),
                patches=list(self._logs.patches),
                snapshots=list(self._logs.snapshots),
            )

    @property
    def action_logs(self) -> list[LogEntry]:
        return list(self._logs.action_logs)

    @property
    def patches(self) -> list[LogEntry]:
        return list(self._logs.patches)

    @property
    def snapshots(self) -> list[LogEntry]:
        return list(self._logs.snapshots)

    @property
    def recordings(self) -> list[Recording]:
        return list(self._recordings)

    @property
    def version(self) -> int:
        """Number of effective mutations so far."""
        return self._version

    # Observers

    def subscribe(self, callback: TrackerObserver) -> None:
        """Register a callback invoked after every mutation."""
        with self._lock:
            self._observers.append(callback)

    def unsubscribe(self, callback: TrackerObserver) -> None:
        """Remove a previously registered callback (no-op if unknown)."""
        with self._lock:
            if callback in self._observers:
                self._observers.remove(callback)

    def _changed(self, *fields: str) -> None:
        self._version += 1
        change = TrackerChange(tracker_id=self._id, fields=fields, version=self._version)
        for callback in list(self._observers):
            try:
                callback(change)
            except Exception as e:
                logger.error(
                    "Error in tracker observer: %s",
                    e,
                    extra={"context": {"tracker_id": self._id, "fields": fields}},
                )

    # Identity & value

    def set_name(self, name: str | None) -> None:
        """Rename the tracker; empty names are ignored."""
        if not name:
            return
        with self._lock:
            self._name = name
            self._changed("name")

    def set_updated_time(self, timestamp: datetime) -> None:
        with self._lock:
            self._updated_on = timestamp
            self._changed("updated_on")

    def set_value(self, value: Any) -> None:
        """Replace the cached value wholesale."""
        with self._lock:
            if value is self._value or (
                type(value) is type(self._value) and value == self._value
            ):
                return
            self._value = value
            self._changed("value")

    # Action registry & selection

    def add_actions(self, action_names: Iterable[str] | None) -> None:
        """
        Replace the action registry with fresh specs for the given names.

        Empty or missing input keeps the current registry. Argument edits
        made on the previous registry are discarded, and the selected
        index is left as is: if it now points past the end, nothing is
        selected.
        """
        if not action_names:
            return
        with self._lock:
            self._actions = [ActionSpec(name=name) for name in action_names]
            self._changed("actions")

    def set_selected_tab(self, index: int) -> None:
        with self._lock:
            self._selected_tab = index
            self._changed("selected_tab")

    def select_action(self, index: int) -> None:
        with self._lock:
            self._selected_action_index = index
            self._changed("selected_action_index")

    def set_action_arguments(self, value: str) -> None:
        """Overwrite the arguments of the selected action."""
        with self._lock:
            action = self._selected_action()
            if action is None:
                if self._actions:
                    logger.debug(
                        "Ignoring arguments for stale selection %s",
                        self._selected_action_index,
                        extra={"context": {"tracker_id": self._id}},
                    )
                return
            action.arguments = value
            self._changed("actions")

    def _selected_action(self) -> ActionSpec | None:
        index = self._selected_action_index
        if 0 <= index < len(self._actions):
            return self._actions[index]
        return None

    # Log channels

    def add_observe_log(self, value: Any, description: Any) -> None:
        """Record an observed change, stamped with the local time."""
        with self._lock:
            self._value = value
            channel = self._logs.action_logs
            self._add_to_top(
                LogEntry(
                    display_number=len(channel) + 1,
                    time=format_log_time(datetime.now()),
                    value=description,
                ),
                channel,
            )
            self._changed("value", LogChannel.ACTION_LOGS.value)

    def add_action_log(self, value: Any, action_meta: Any) -> None:
        """Record an invoked action. Action entries carry no time."""
        with self._lock:
            self._value = value
            channel = self._logs.action_logs
            self._add_to_top(
                LogEntry(display_number=len(channel) + 1, value=action_meta),
                channel,
            )
            self._changed("value", LogChannel.ACTION_LOGS.value)

    def add_patch(self, value: Any, patch: Any) -> None:
        with self._lock:
            self._value = value
            channel = self._logs.patches
            self._add_to_top(
                LogEntry(display_number=len(channel) + 1, value=patch),
                channel,
            )
            self._changed("value", LogChannel.PATCHES.value)

    def add_snapshot(self, value: Any, snapshot: Any) -> None:
        with self._lock:
            self._value = value
            channel = self._logs.snapshots
            self._add_to_top(
                LogEntry(
                    display_number=len(channel) + 1,
                    time=format_log_time(datetime.now()),
                    value=snapshot,
                ),
                channel,
            )
            self._changed("value", LogChannel.SNAPSHOTS.value)

    @staticmethod
    def _add_to_top(entry: LogEntry | None, channel: list[LogEntry]) -> None:
        if not entry:
            return
        channel.insert(0, entry)

    def clear_logs(self) -> None:
        """Empty all log channels."""
        with self._lock:
            self._logs.clear()
            self._changed(*(c.value for c in LogChannel))

    def set_log_expanded(
        self, channel: LogChannel, display_number: int, expanded: bool = True
    ) -> None:
        """Expand or collapse the entry with the given display number."""
        channel = LogChannel(channel)
        with self._lock:
            for entry in self._logs.channel(channel):
                if entry.display_number == display_number:
                    entry.is_expanded = expanded
                    self._changed(channel.value)
                    return
        raise LogEntryNotFoundError(channel.value, display_number)

    # Recordings

    def add_recording(self, recording_id: str) -> None:
        """Append an un-named recording; empty or known ids are ignored."""
        if not recording_id:
            return
        with self._lock:
            if self._find_recording(recording_id):
                logger.warning(
                    "Recording %s already tracked",
                    recording_id,
                    extra={"context": {"tracker_id": self._id}},
                )
                return
            self._recordings.append(Recording(recording_id=recording_id))
            self._changed("recordings")

    def remove_recording(self, recording_id: str) -> None:
        """Remove a recording; unknown ids are ignored."""
        with self._lock:
            recording = self._find_recording(recording_id)
            if recording is None:
                return
            self._recordings.remove(recording)
            self._changed("recordings")

    def rename_recording(self, recording_id: str, name: str) -> None:
        """Rename a recording in place."""
        with self._lock:
            recording = self._find_recording(recording_id)
            if recording is None:
                raise RecordingNotFoundError(recording_id)
            recording.name = name
            self._changed("recordings")

    def _find_recording(self, recording_id: str) -> Recording | None:
        return next(
            (r for r in self._recordings if r.recording_id == recording_id), None
        )

    # Serialization

    def to_dict(self) -> dict:
        """Plain-data view of the tracker; log payloads are not copied."""
        with self._lock:
            return {
                "id": self._id,
                "node_type": int(self._node_type),
                "name": self._name,
                "updated_on": self._updated_on.isoformat(),
                "value": self._value,
                "actions": [
                    {"name": a.name, "arguments": a.arguments} for a in self._actions
                ],
                "selected_action_index": self._selected_action_index,
                "selected_tab": self._selected_tab,
                "action_arguments": self.action_arguments,
                "logs": {
                    channel.value: [
                        {
                            "display_number": e.display_number,
                            "time": e.time,
                            "is_expanded": e.is_expanded,
                            "value": e.value,
                        }
                        for e in self._logs.channel(channel)
                    ]
                    for channel in LogChannel
                },
                "recordings": [
                    {"recording_id": r.recording_id, "name": r.name}
                    for r in self._recordings
                ],
                "version": self._version,
            }
