"""State Inspector: tracker core for a reactive state-tree debugging dashboard."""

from .app import Application, IApplication
from .bridge import IInstrumentationBridge, InstrumentationBridge
from .errors import (
    ConfigError,
    InspectorError,
    InvalidEventError,
    LogEntryNotFoundError,
    RecordingNotFoundError,
    TrackerNotFoundError,
)
from .event_bus import EventBus, IEventBus
from .models import (
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
from .registry import ITrackerRegistry, TrackerRegistry
from .tracker import ITracker, Tracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "NodeType",
    "LogChannel",
    "ActionSpec",
    "LogEntry",
    "Recording",
    "TrackerLogs",
    "TrackerChange",
    "BusMessage",
    "Topic",
    # Errors
    "InspectorError",
    "ConfigError",
    "TrackerNotFoundError",
    "RecordingNotFoundError",
    "LogEntryNotFoundError",
    "InvalidEventError",
    # Components
    "ITracker",
    "Tracker",
    "ITrackerRegistry",
    "TrackerRegistry",
    "IEventBus",
    "EventBus",
    "IInstrumentationBridge",
    "InstrumentationBridge",
]
