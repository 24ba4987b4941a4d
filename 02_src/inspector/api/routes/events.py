"""Instrumentation event API routes."""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Query

from ...app import Application
from ...errors import InvalidEventError, TrackerNotFoundError
from ...models import BusMessage, Topic


class EventRequest(BaseModel):
    """Request model for an instrumentation event."""

    topic: Topic
    source: str = "bridge"
    payload: dict[str, Any] = Field(default_factory=dict)


class EventResponse(BaseModel):
    """Response model for a published event."""

    id: str
    topic: Topic
    source: str
    payload: dict[str, Any]
    timestamp: datetime


def create_events_router(app: Application) -> APIRouter:
    """Create events router."""
    router = APIRouter(prefix="/api", tags=["events"])

    @router.post("/events", response_model=EventResponse)
    async def publish_event(request: EventRequest) -> dict:
        """Publish an event of the monitored process to the EventBus."""
        try:
            app.bridge.validate(request.topic, request.payload)

            message = BusMessage(
                id=str(uuid.uuid4()),
                topic=request.topic,
                payload=request.payload,
                source=request.source,
                timestamp=datetime.now(timezone.utc),
            )
            await app.event_bus.publish(message)

            return {
                "id": message.id,
                "topic": message.topic,
                "source": message.source,
                "payload": message.payload,
                "timestamp": message.timestamp,
            }

        except InvalidEventError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except TrackerNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/events", response_model=list[EventResponse])
    async def get_events(limit: int = Query(100, ge=1, le=1000)) -> list[dict]:
        """Get recently published events (newest first)."""
        return [
            {
                "id": m.id,
                "topic": m.topic,
                "source": m.source,
                "payload": m.payload,
                "timestamp": m.timestamp,
            }
            for m in app.event_bus.history(limit)
        ]

    return router
