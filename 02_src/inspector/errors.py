"""inspector.errors

Central error types to keep error handling consistent.
"""


class InspectorError(Exception):
    """Base inspector error."""


class ConfigError(InspectorError):
    """Raised when configuration is missing or invalid."""


class TrackerNotFoundError(InspectorError):
    """Raised when no tracker is registered under the given id."""

    def __init__(self, tracker_id: str):
        super().__init__(f"Tracker not found: {tracker_id}")
        self.tracker_id = tracker_id


class RecordingNotFoundError(InspectorError):
    """Raised when a tracker has no recording with the given id."""

    def __init__(self, recording_id: str):
        super().__init__(f"Recording not found: {recording_id}")
        self.recording_id = recording_id


class LogEntryNotFoundError(InspectorError):
    """Raised when a log channel has no entry with the given display number."""

    def __init__(self, channel: str, display_number: int):
        super().__init__(f"No entry #{display_number} in {channel}")
        self.channel = channel
        self.display_number = display_number


class InvalidEventError(InspectorError):
    """Raised when a bridge event is missing required fields."""
