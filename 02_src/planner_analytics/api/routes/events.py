"""Event tracking and listing routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...exceptions import PrivacyViolationError


class TrackRequest(BaseModel):
    """Request model for tracking an event."""

    name: str
    properties: dict[str, Any] = Field(default_factory=dict)
    session_id: str | None = None


class TrackResponse(BaseModel):
    """Response model for a tracked event."""

    status: str  # "ok" or "dropped"
    properties: dict[str, Any] = Field(default_factory=dict)  # as sent


class EventResponse(BaseModel):
    """Response model for a collected event."""

    id: str
    name: str
    properties: dict[str, Any]
    session_id: str | None
    timestamp: datetime


def create_events_router(app: IApplication) -> APIRouter:
    """Create events router."""
    router = APIRouter(prefix="/api", tags=["events"])

    @router.post("/events", response_model=TrackResponse)
    async def track_event(request: TrackRequest) -> dict:
        """Track an event through the configured vendor."""
        try:
            event = await app.tracker.track(
                request.name, request.properties, session_id=request.session_id
            )
        except PrivacyViolationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        if event is None:
            return {"status": "dropped", "properties": {}}
        return {"status": "ok", "properties": event.properties}

    @router.get("/events", response_model=list[EventResponse])
    async def list_events(
        after: str | None = Query(None, description="ISO timestamp filter"),
        limit: int = Query(100, ge=1, le=1000),
        name: str | None = Query(None, description="Filter by event name"),
    ) -> list[dict]:
        """List collected events, newest first."""
        try:
            after_dt = None
            if after:
                try:
                    after_dt = datetime.fromisoformat(after)
                except ValueError:
                    raise HTTPException(
                        status_code=400, detail="Invalid after timestamp format"
                    )

            names = [name] if name else None

            collected = await app.storage.get_collected_events(
                after=after_dt, names=names, limit=limit
            )

            return [
                {
                    "id": e.id,
                    "name": e.name,
                    "properties": e.properties,
                    "session_id": e.session_id,
                    "timestamp": e.timestamp.isoformat(),
                }
                for e in collected
            ]

        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/events/summary", response_model=dict[str, int])
    async def event_summary() -> dict:
        """Collected event counts per name."""
        try:
            return await app.storage.count_collected_by_name()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
