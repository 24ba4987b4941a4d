"""Tracker API routes used by the dashboard UI."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application
from ...errors import LogEntryNotFoundError, RecordingNotFoundError, TrackerNotFoundError
from ...models import LogChannel
from ...tracker import Tracker


class ActionResponse(BaseModel):
    """Response model for an action spec."""

    name: str
    arguments: str


class LogEntryResponse(BaseModel):
    """Response model for a log entry."""

    display_number: int
    time: str | None = None
    is_expanded: bool
    value: Any = None


class RecordingResponse(BaseModel):
    """Response model for a recording."""

    recording_id: str
    name: str


class TrackerSummaryResponse(BaseModel):
    """Response model for a tracker list item."""

    id: str
    node_type: int
    name: str
    updated_on: datetime
    version: int


class TrackerResponse(TrackerSummaryResponse):
    """Response model for a full tracker."""

    value: Any = None
    actions: list[ActionResponse]
    selected_action_index: int
    selected_tab: int
    action_arguments: str
    logs: dict[str, list[LogEntryResponse]]
    recordings: list[RecordingResponse]


class NameRequest(BaseModel):
    name: str


class IndexRequest(BaseModel):
    index: int


class ArgumentsRequest(BaseModel):
    arguments: str


class ExpandedRequest(BaseModel):
    expanded: bool = True


class RecordingRequest(BaseModel):
    recording_id: str


class RecordingRenameRequest(BaseModel):
    name: str


def create_trackers_router(app: Application) -> APIRouter:
    """Create trackers router."""
    router = APIRouter(prefix="/api/trackers", tags=["trackers"])

    def get_tracker(tracker_id: str) -> Tracker:
        try:
            return app.registry.get(tracker_id)
        except TrackerNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))

    @router.get("", response_model=list[TrackerSummaryResponse])
    async def list_trackers() -> list[dict]:
        """Get all trackers of the session."""
        return [
            {
                "id": t.id,
                "node_type": int(t.node_type),
                "name": t.name,
                "updated_on": t.updated_on,
                "version": t.version,
            }
            for t in app.registry.all()
        ]

    @router.get("/{tracker_id}", response_model=TrackerResponse)
    async def get_tracker_state(tracker_id: str) -> dict:
        """Get the full state of a tracker."""
        return get_tracker(tracker_id).to_dict()

    @router.put("/{tracker_id}/name", response_model=TrackerResponse)
    async def set_name(tracker_id: str, request: NameRequest) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.set_name(request.name)
        return tracker.to_dict()

    @router.put("/{tracker_id}/selected-tab", response_model=TrackerResponse)
    async def set_selected_tab(tracker_id: str, request: IndexRequest) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.set_selected_tab(request.index)
        return tracker.to_dict()

    @router.put("/{tracker_id}/selected-action", response_model=TrackerResponse)
    async def select_action(tracker_id: str, request: IndexRequest) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.select_action(request.index)
        return tracker.to_dict()

    @router.put("/{tracker_id}/action-arguments", response_model=TrackerResponse)
    async def set_action_arguments(tracker_id: str, request: ArgumentsRequest) -> dict:
        """Edit the arguments of the selected action."""
        tracker = get_tracker(tracker_id)
        tracker.set_action_arguments(request.arguments)
        return tracker.to_dict()

    @router.post("/{tracker_id}/logs/clear", response_model=TrackerResponse)
    async def clear_logs(tracker_id: str) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.clear_logs()
        return tracker.to_dict()

    @router.put(
        "/{tracker_id}/logs/{channel}/{display_number}/expanded",
        response_model=TrackerResponse,
    )
    async def set_log_expanded(
        tracker_id: str, channel: LogChannel, display_number: int, request: ExpandedRequest
    ) -> dict:
        """Expand or collapse one log entry."""
        tracker = get_tracker(tracker_id)
        try:
            tracker.set_log_expanded(channel, display_number, request.expanded)
        except LogEntryNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return tracker.to_dict()

    @router.post("/{tracker_id}/recordings", response_model=TrackerResponse)
    async def add_recording(tracker_id: str, request: RecordingRequest) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.add_recording(request.recording_id)
        return tracker.to_dict()

    @router.put("/{tracker_id}/recordings/{recording_id}", response_model=TrackerResponse)
    async def rename_recording(
        tracker_id: str, recording_id: str, request: RecordingRenameRequest
    ) -> dict:
        tracker = get_tracker(tracker_id)
        try:
            tracker.rename_recording(recording_id, request.name)
        except RecordingNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return tracker.to_dict()

    @router.delete("/{tracker_id}/recordings/{recording_id}", response_model=TrackerResponse)
    async def remove_recording(tracker_id: str, recording_id: str) -> dict:
        tracker = get_tracker(tracker_id)
        tracker.remove_recording(recording_id)
        return tracker.to_dict()

    return router
