"""Tracker-related data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeType(int, Enum):
    """Kind of monitored entity, numbered as the client library sends it."""

    REACTIVE_OBSERVABLE = 0
    STATE_TREE_NODE = 1
    PLAIN_VALUE = 2


class LogChannel(str, Enum):
    """Log channels of a tracker."""

    ACTION_LOGS = "action_logs"
    PATCHES = "patches"
    SNAPSHOTS = "snapshots"


@dataclass
class ActionSpec:
    """An invocable action and its operator-edited arguments."""

    name: str
    arguments: str = "[]"  # raw editable literal


@dataclass
class LogEntry:
    """A single entry of a log channel."""

    display_number: int
    value: Any  # held by reference, never copied
    is_expanded: bool = False
    time: str | None = None


@dataclass
class Recording:
    """Named reference to an externally managed recording."""

    recording_id: str
    name: str = "Un-named"


@dataclass
class TrackerLogs:
    """The three newest-first log channels of a tracker."""

    action_logs: list[LogEntry] = field(default_factory=list)
    patches: list[LogEntry] = field(default_factory=list)
    snapshots: list[LogEntry] = field(default_factory=list)

    def channel(self, channel: LogChannel) -> list[LogEntry]:
        """Get the entry list backing a channel."""
        return getattr(self, LogChannel(channel).value)

    def clear(self) -> None:
        """Empty all channels."""
        self.action_logs.clear()
        self.patches.clear()
        self.snapshots.clear()


@dataclass(frozen=True)
class TrackerChange:
    """Notification sent to tracker observers after a mutation."""

    tracker_id: str
    fields: tuple[str, ...]
    version: int
