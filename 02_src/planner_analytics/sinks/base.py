"""Sink protocol shared by vendor integrations."""

from typing import Protocol

from ..models import AnalyticsEvent


class IAnalyticsSink(Protocol):
    """A vendor (or self-hosted) destination for analytics events."""

    async def capture(self, event: AnalyticsEvent) -> None:
        """Hand one event to the vendor."""
        ...

    async def flush(self) -> None:
        """Push out anything queued locally."""
        ...

    async def close(self) -> None:
        """Flush and release resources."""
        ...
