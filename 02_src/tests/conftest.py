"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def tracker():
    """Create a state-tree tracker."""
    from inspector.models import NodeType
    from inspector.tracker import Tracker

    return Tracker("tracker1", name="TodoStore", node_type=NodeType.STATE_TREE_NODE)


@pytest.fixture
def registry():
    """Create empty tracker registry."""
    from inspector.registry import TrackerRegistry

    return TrackerRegistry()


@pytest.fixture
def event_bus():
    """Create EventBus."""
    from inspector.event_bus import EventBus

    return EventBus(history_limit=10)


@pytest_asyncio.fixture
async def bridge(event_bus, registry):
    """Create and start InstrumentationBridge."""
    from inspector.bridge import InstrumentationBridge

    br = InstrumentationBridge(event_bus=event_bus, registry=registry)
    await br.start()
    yield br
    await br.stop()


@pytest.fixture
def settings(tmp_path):
    """Create settings that don't depend on the environment."""
    from inspector.config import Settings

    return Settings(log_file=tmp_path / "app.log", event_history_limit=50)


@pytest_asyncio.fixture
async def application(settings):
    """Create and start Application."""
    from inspector.app import Application

    app = Application(settings=settings)
    await app.start()
    yield app
    await app.stop()


@pytest.fixture
def api_app(settings):
    """Create Application served by the test client (started by its lifespan)."""
    from inspector.app import Application

    return Application(settings=settings)


@pytest.fixture
def client(api_app):
    """Create FastAPI test client."""
    from fastapi.testclient import TestClient

    from inspector.api import create_fastapi_app

    with TestClient(create_fastapi_app(api_app)) as test_client:
        yield test_client
