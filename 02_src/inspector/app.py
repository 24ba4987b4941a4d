"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .bridge import InstrumentationBridge
from .config import Settings, load_settings
from .event_bus import EventBus
from .logging_config import get_logger
from .registry import TrackerRegistry

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop all trackers and bus history (ends the session)."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or load_settings()

        # Components (will be initialized in start())
        self._event_bus: EventBus | None = None
        self._registry: TrackerRegistry | None = None
        self._bridge: InstrumentationBridge | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. EventBus (no dependencies)
        self._event_bus = EventBus(history_limit=self._settings.event_history_limit)
        logger.info("EventBus initialized")

        # 2. TrackerRegistry (no dependencies)
        self._registry = TrackerRegistry()

        # 3. InstrumentationBridge (depends on EventBus + TrackerRegistry)
        self._bridge = InstrumentationBridge(self._event_bus, self._registry)
        await self._bridge.start()
        logger.info("InstrumentationBridge started")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._bridge:
            await self._bridge.stop()
        logger.info("Application stopped")

    async def reset(self) -> None:
        """Drop all trackers and bus history (ends the session)."""
        if self._registry is not None:
            self._registry.clear()
        if self._event_bus:
            self._event_bus.clear_history()
        logger.info("Reset complete")

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def event_bus(self) -> EventBus:
        """Get event bus instance."""
        if not self._event_bus:
            raise RuntimeError("Application not started")
        return self._event_bus

    @property
    def registry(self) -> TrackerRegistry:
        """Get tracker registry instance."""
        if self._registry is None:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def bridge(self) -> InstrumentationBridge:
        """Get instrumentation bridge instance."""
        if not self._bridge:
            raise RuntimeError("Application not started")
        return self._bridge
