"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


class SimStatusResponse(StatusResponse):
    """Status plus whether the traffic simulator is replaying visits."""

    running: bool


# Traffic simulator, registered by main.py
_sim_instance: Any = None


def set_sim_instance(sim: Any) -> None:
    """Register the traffic simulator."""
    global _sim_instance
    _sim_instance = sim


def get_sim_instance() -> Any:
    """Registered traffic simulator, or None."""
    return _sim_instance


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/flush", response_model=StatusResponse)
    async def flush_events() -> dict:
        """Ship whatever the vendor sink has queued."""
        try:
            await app.tracker.flush()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Drop buffered and collected events."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def require_sim() -> Any:
        if _sim_instance is None:
            raise HTTPException(status_code=404, detail="Traffic simulator not configured")
        return _sim_instance

    @router.post("/sim/start", response_model=SimStatusResponse)
    async def start_sim() -> dict:
        """Start replaying planning-suite visits against /api/events."""
        sim = require_sim()
        try:
            await sim.start()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok", "running": sim.running}

    @router.post("/sim/stop", response_model=SimStatusResponse)
    async def stop_sim() -> dict:
        """Cancel the replay; events already sent stay collected."""
        sim = require_sim()
        try:
            await sim.stop()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "ok", "running": sim.running}

    return router
