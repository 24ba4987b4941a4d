"""Control API routes: session reset and the scripted producer."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class SessionResponse(BaseModel):
    """Response model for the session overview."""

    trackers: int
    sim_configured: bool
    sim_running: bool


# Global SIM instance (will be set by main app)
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Set the global SIM instance."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Get the global SIM instance."""
    return _sim_instance


def _require_sim() -> Any:
    if not _sim_instance:
        raise HTTPException(status_code=404, detail="SIM not configured")
    return _sim_instance


def create_control_router(app: Application) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.get("/session", response_model=SessionResponse)
    async def get_session() -> dict:
        """Tracker count and producer state of the current session."""
        return {
            "trackers": len(app.registry),
            "sim_configured": _sim_instance is not None,
            "sim_running": bool(_sim_instance and _sim_instance.running),
        }

    @router.post("/reset", response_model=StatusResponse)
    async def reset_session() -> dict:
        """Drop all trackers and start a new dashboard session."""
        await app.reset()
        return {"status": "ok"}

    @router.post("/sim/start", response_model=StatusResponse)
    async def start_sim() -> dict:
        """Start the scripted producer; a finished run starts over."""
        await _require_sim().start()
        return {"status": "ok"}

    @router.post("/sim/stop", response_model=StatusResponse)
    async def stop_sim() -> dict:
        await _require_sim().stop()
        return {"status": "ok"}

    return router
