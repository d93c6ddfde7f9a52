"""CollectorSink: the DIY option.

Events accumulate in local storage. Once `batch_size` are buffered the
oldest batch is posted to the collection endpoint and removed only after
the endpoint accepts it. A failed batch stays buffered and is retried on
the next capture or flush.
"""

import asyncio

from ..buffer import IBatchUploader, IEventBuffer
from ..config import DEFAULT_BATCH_SIZE, DEFAULT_MAX_BUFFERED
from ..logging_config import get_logger
from ..models import AnalyticsEvent

logger = get_logger(__name__)


class CollectorSink:
    """Buffers events locally and ships them in batches."""

    def __init__(
        self,
        buffer: IEventBuffer,
        uploader: IBatchUploader,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_buffered: int = DEFAULT_MAX_BUFFERED,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if max_buffered < batch_size:
            raise ValueError("max_buffered must not be smaller than batch_size")

        self._buffer = buffer
        self._uploader = uploader
        self._batch_size = batch_size
        self._max_buffered = max_buffered
        self._send_lock = asyncio.Lock()

    @property
    def batch_size(self) -> int:
        return self._batch_size

    async def capture(self, event: AnalyticsEvent) -> None:
        """Buffer the event and send a batch once enough are waiting."""
        await self._buffer.append(event)

        count = await self._buffer.count()
        if count > self._max_buffered:
            dropped = await self._buffer.trim(self._max_buffered)
            logger.warning("Buffer full, discarded %s oldest events", dropped)
            count -= dropped

        if count >= self._batch_size:
            await self._send_batch()

    async def flush(self) -> None:
        """Send everything buffered, stopping at the first failed batch."""
        while await self._buffer.count() > 0:
            if not await self._send_batch(allow_partial=True):
                break

    async def close(self) -> None:
        await self.flush()
        await self._uploader.close()

    async def _send_batch(self, allow_partial: bool = False) -> bool:
        """Send the oldest batch. True when it was delivered and cleared."""
        async with self._send_lock:
            batch = await self._buffer.peek(self._batch_size)
            if not batch:
                return False
            if len(batch) < self._batch_size and not allow_partial:
                # Another capture already shipped the full batch
                return False

            delivered = await self._uploader.send([b.event for b in batch])
            if not delivered:
                logger.info("Keeping %s events buffered for the next attempt", len(batch))
                return False

            await self._buffer.remove([b.seq for b in batch])
            return True
