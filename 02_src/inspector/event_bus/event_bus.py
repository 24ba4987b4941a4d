"""EventBus implementation for pub/sub messaging."""

import asyncio
import uuid
from collections import deque
from typing import Awaitable, Callable, Protocol

from ..logging_config import get_logger
from ..models import BusMessage, Topic

logger = get_logger(__name__)


TopicHandler = Callable[[BusMessage], Awaitable[None]]


class IEventBus(Protocol):
    """In-memory pub/sub for exchanging BusMessages."""

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Subscribe a handler to a topic."""
        ...

    async def publish(self, message: BusMessage) -> None:
        """Publish BusMessage: calls subscriber callbacks, keeps history."""
        ...


class EventBus:
    """In-memory pub/sub event bus."""

    def __init__(self, history_limit: int = 1000):
        self._subscribers: dict[Topic, list[TopicHandler]] = {
            topic: [] for topic in Topic
        }
        self._history: deque[BusMessage] = deque(maxlen=history_limit)

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Subscribe a handler to a topic."""
        self._subscribers[topic].append(handler)

    async def publish(self, message: BusMessage) -> None:
        """Publish BusMessage: calls subscriber callbacks, keeps history."""
        if not message.id:
            message.id = str(uuid.uuid4())

        handlers = self._subscribers.get(message.topic, [])

        if handlers:
            results = await asyncio.gather(
                *[handler(message) for handler in handlers],
                return_exceptions=True,
            )

            for i, result in enumerate(results):
                if isinstance(result, Exception):
                    logger.error(
                        "Error in handler %s: %s",
                        i,
                        result,
                        extra={"context": {"topic": message.topic.value, "message_id": message.id}},
                    )

        self._history.append(message)

    def history(self, limit: int = 100) -> list[BusMessage]:
        """Get published messages (newest first)."""
        return list(reversed(self._history))[:limit]

    def clear_history(self) -> None:
        self._history.clear()
