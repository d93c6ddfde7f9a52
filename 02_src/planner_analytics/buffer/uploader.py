"""BatchUploader: ships a batch of events to a collection endpoint."""

from datetime import datetime, timezone
from typing import Protocol

import httpx

from ..logging_config import get_logger
from ..models import AnalyticsEvent

logger = get_logger(__name__)


class IBatchUploader(Protocol):
    """Sends batches; reports success as a bool, never raises."""

    async def send(self, events: list[AnalyticsEvent]) -> bool:
        """POST a batch. True on a 2xx response."""
        ...

    async def close(self) -> None:
        """Release the HTTP client."""
        ...


class BatchUploader:
    """Fire-and-forget JSON POST of event batches via httpx."""

    def __init__(
        self,
        endpoint: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, events: list[AnalyticsEvent]) -> bool:
        """POST a batch. True on a 2xx response."""
        if not events:
            return True

        body = {
            "batch": [event.to_dict() for event in events],
            "sent_at": datetime.now(timezone.utc).isoformat(),
        }

        try:
            response = await self._client.post(self._endpoint, json=body)
        except httpx.HTTPError as e:
            logger.warning(
                "Batch of %s events not delivered to %s: %s",
                len(events),
                self._endpoint,
                e,
            )
            return False

        if response.is_success:
            logger.debug("Delivered batch of %s events", len(events))
            return True

        logger.warning(
            "Batch of %s events rejected by %s: HTTP %s",
            len(events),
            self._endpoint,
            response.status_code,
        )
        return False

    async def close(self) -> None:
        """Release the HTTP client."""
        if self._owns_client:
            await self._client.aclose()
