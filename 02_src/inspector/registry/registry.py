"""Session registry of trackers."""

from typing import Protocol

from ..errors import TrackerNotFoundError
from ..logging_config import get_logger
from ..models import NodeType
from ..tracker import Tracker

logger = get_logger(__name__)


class ITrackerRegistry(Protocol):
    """Trackers of the current dashboard session, keyed by id."""

    def register(
        self, tracker_id: str, name: str = "", node_type: NodeType | int = NodeType.PLAIN_VALUE
    ) -> Tracker:
        """Create a tracker, or return the existing one."""
        ...

    def get(self, tracker_id: str) -> Tracker:
        """Get a tracker or raise TrackerNotFoundError."""
        ...

    def all(self) -> list[Tracker]:
        """All trackers in registration order."""
        ...


class TrackerRegistry:
    """In-memory tracker registry for one dashboard session."""

    def __init__(self):
        self._trackers: dict[str, Tracker] = {}

    def register(
        self,
        tracker_id: str,
        name: str = "",
        node_type: NodeType | int = NodeType.PLAIN_VALUE,
    ) -> Tracker:
        """Create a tracker, or rename and return the existing one."""
        tracker = self._trackers.get(tracker_id)
        if tracker is not None:
            tracker.set_name(name)
            return tracker

        tracker = Tracker(tracker_id, name=name, node_type=node_type)
        self._trackers[tracker_id] = tracker
        logger.info(
            "Tracker registered",
            extra={"context": {"tracker_id": tracker_id, "node_type": int(tracker.node_type)}},
        )
        return tracker

    def get(self, tracker_id: str) -> Tracker:
        tracker = self._trackers.get(tracker_id)
        if tracker is None:
            raise TrackerNotFoundError(tracker_id)
        return tracker

    def find(self, tracker_id: str) -> Tracker | None:
        return self._trackers.get(tracker_id)

    def all(self) -> list[Tracker]:
        return list(self._trackers.values())

    def clear(self) -> None:
        """End the session: drop every tracker."""
        self._trackers.clear()

    def __len__(self) -> int:
        return len(self._trackers)

    def __contains__(self, tracker_id: object) -> bool:
        return tracker_id in self._trackers
