"""Reporting routes: funnels and local buffer status."""

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...funnels import compute_funnel


class FunnelStepResponse(BaseModel):
    """Response model for one funnel step."""

    name: str
    sessions: int
    conversion_rate: float | None


class FunnelResponse(BaseModel):
    """Response model for a funnel report."""

    steps: list[FunnelStepResponse]
    total_sessions: int
    overall_conversion: float | None


class BufferResponse(BaseModel):
    """Response model for local buffer status."""

    buffered: int


def create_reports_router(app: IApplication) -> APIRouter:
    """Create reports router."""
    router = APIRouter(prefix="/api", tags=["reports"])

    @router.get("/funnels", response_model=FunnelResponse)
    async def get_funnel(
        steps: list[str] = Query([], description="Ordered event names"),
    ) -> dict:
        """Step-to-step completion for an ordered list of events."""
        if not steps:
            raise HTTPException(status_code=400, detail="At least one step is required")

        try:
            session_events = await app.storage.get_session_events(list(set(steps)))
            report = compute_funnel(session_events, steps)
            return {
                "steps": [
                    {
                        "name": s.name,
                        "sessions": s.sessions,
                        "conversion_rate": s.conversion_rate,
                    }
                    for s in report.steps
                ],
                "total_sessions": report.total_sessions,
                "overall_conversion": report.overall_conversion,
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/buffer", response_model=BufferResponse)
    async def get_buffer_status() -> dict:
        """Number of events waiting in the local buffer."""
        try:
            return {"buffered": await app.buffer.count()}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
