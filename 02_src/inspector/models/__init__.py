"""Core data models for State Inspector."""

from .bus import BusMessage, Topic
from .tracker import (
    ActionSpec,
    LogChannel,
    LogEntry,
    NodeType,
    Recording,
    TrackerChange,
    TrackerLogs,
)

__all__ = [
    # Tracker
    "NodeType",
    "LogChannel",
    "ActionSpec",
    "LogEntry",
    "Recording",
    "TrackerLogs",
    "TrackerChange",
    # Bus
    "BusMessage",
    "Topic",
]
