"""SIM implementation - scripted producer for demos."""

import asyncio
import copy
import random
from typing import Protocol

import httpx

from inspector.logging_config import get_logger
from inspector.models import NodeType, Topic

logger = get_logger(__name__)

TRACKER_ID = "sim-todo-store"


class ISim(Protocol):
    """Push instrumentation events of a fake todo store."""

    async def start(self) -> None:
        """Start scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """SIM with a scripted todo-store scenario."""

    def __init__(self, api_url: str = "http://localhost:8000", rounds: int = 3):
        self._api_url = api_url
        self._rounds = rounds
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    @property
    def running(self) -> bool:
        """Whether the scenario is still pushing events."""
        return self._running

    async def start(self) -> None:
        """Start scripted scenario."""
        if self._running:
            return

        self._running = True
        if self._client:
            await self._client.aclose()
        self._client = httpx.AsyncClient()

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()

    async def _run_scenario(self) -> None:
        """Run scripted scenario."""
        state = {"todos": []}

        try:
            await self._send_event(
                Topic.REGISTER,
                {"name": "TodoStore", "node_type": int(NodeType.STATE_TREE_NODE)},
            )
            await self._send_event(
                Topic.ACTIONS, {"actions": ["addTodo", "toggleTodo", "removeTodo"]}
            )

            for i in range(self._rounds):
                if not self._running:
                    break

                todo = {"id": i, "title": f"Todo #{i + 1}", "done": False}
                state["todos"].append(todo)
                value = copy.deepcopy(state)

                await self._send_event(
                    Topic.ACTION,
                    {"value": value, "payload": {"name": "addTodo", "args": [todo["title"]]}},
                )
                await self._send_event(
                    Topic.PATCH,
                    {"value": value, "payload": {"op": "add", "path": f"/todos/{i}", "value": todo}},
                )
                await self._send_event(Topic.SNAPSHOT, {"value": value, "payload": value})
                await self._send_event(Topic.UPDATED, {})

                # Random delay between rounds (1-3 seconds)
                await asyncio.sleep(random.uniform(1, 3))

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _send_event(self, topic: Topic, payload: dict) -> None:
        """Send an instrumentation event via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.post(
                f"{self._api_url}/api/events",
                json={
                    "topic": topic.value,
                    "source": "sim",
                    "payload": {"tracker_id": TRACKER_ID, **payload},
                },
                timeout=10.0,
            )

            if response.status_code == 200:
                logger.info("SIM: %s -> %s", topic.value, TRACKER_ID)
            else:
                logger.error(
                    "SIM: Error sending event: %s",
                    response.status_code,
                )

        except Exception as e:
            logger.error("SIM: Failed to send event: %s", e)
