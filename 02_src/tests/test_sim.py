"""Tests for SIM."""

import json

import httpx
import pytest

from sim import Sim
from sim.sim import TRACKER_ID
from inspector.models import Topic


@pytest.mark.asyncio
async def test_send_event_posts_to_events_api():
    """Test that SIM events target /api/events with the tracker id."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    sim = Sim(api_url="http://inspector.test")
    sim._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    await sim._send_event(Topic.PATCH, {"value": {}, "payload": {"op": "add"}})
    await sim._client.aclose()

    assert len(requests) == 1
    assert str(requests[0].url) == "http://inspector.test/api/events"
    body = json.loads(requests[0].content)
    assert body == {
        "topic": "patch",
        "source": "sim",
        "payload": {"tracker_id": TRACKER_ID, "value": {}, "payload": {"op": "add"}},
    }


@pytest.mark.asyncio
async def test_send_event_without_client():
    """Test that sending before start does nothing."""
    sim = Sim()
    await sim._send_event(Topic.VALUE, {"value": 1})


@pytest.mark.asyncio
async def test_running_cleared_when_scenario_finishes():
    """Test that a finished scenario can be started again."""
    sim = Sim(api_url="http://inspector.test", rounds=0)
    sim._client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
    )
    sim._running = True

    await sim._run_scenario()
    await sim._client.aclose()

    assert sim.running is False
