"""EventBuffer: on-device event queue backed by Storage."""

from typing import Protocol

from ..models import AnalyticsEvent, BufferedEvent
from ..storage import IStorage


class IEventBuffer(Protocol):
    """Events waiting to be shipped, oldest first."""

    async def append(self, event: AnalyticsEvent) -> int:
        """Add an event, return its sequence number."""
        ...

    async def count(self) -> int:
        """Number of buffered events."""
        ...

    async def peek(self, limit: int) -> list[BufferedEvent]:
        """Oldest `limit` events without removing them."""
        ...

    async def remove(self, seqs: list[int]) -> None:
        """Remove events by sequence number."""
        ...

    async def trim(self, keep: int) -> int:
        """Discard the oldest events beyond `keep`."""
        ...


class EventBuffer:
    """Local on-device storage for the DIY option."""

    def __init__(self, storage: IStorage):
        self._storage = storage

    async def append(self, event: AnalyticsEvent) -> int:
        return await self._storage.buffer_event(event)

    async def count(self) -> int:
        return await self._storage.count_buffered()

    async def peek(self, limit: int) -> list[BufferedEvent]:
        return await self._storage.get_buffered(limit=limit)

    async def remove(self, seqs: list[int]) -> None:
        await self._storage.delete_buffered(seqs)

    async def trim(self, keep: int) -> int:
        return await self._storage.trim_buffered(keep)
