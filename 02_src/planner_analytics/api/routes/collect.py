"""Self-hosted collection endpoint for the DIY option."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class CollectRequest(BaseModel):
    """A batch posted by a CollectorSink."""

    batch: list[dict[str, Any]]
    sent_at: datetime | None = None


class CollectResponse(BaseModel):
    """Response model for a received batch."""

    accepted: int


def create_collect_router(app: IApplication) -> APIRouter:
    """Create collection router."""
    router = APIRouter(prefix="/api", tags=["collect"])

    @router.post("/collect", response_model=CollectResponse)
    async def collect_batch(request: CollectRequest) -> dict:
        """Store a batch of events."""
        try:
            accepted = await app.collect(request.batch)
            return {"accepted": accepted}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
