"""Application bootstrap and lifecycle management."""

from dataclasses import replace
from typing import Any, Protocol

from .buffer import BatchUploader, EventBuffer
from .config import VENDOR_COLLECTOR, VENDOR_POSTHOG, Settings, resolve_db_path
from .exceptions import PrivacyViolationError
from .logging_config import get_logger
from .models import AnalyticsEvent
from .privacy import PrivacyFilter, validate_event_name
from .sinks import CollectorSink, IAnalyticsSink, build_posthog_sink
from .storage import IStorage, Storage
from .tracker import AnalyticsTracker, ITracker

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Drop buffered and collected events."""
        ...

    async def collect(self, raw_events: list[dict[str, Any]]) -> int:
        """Accept a batch posted to the collection endpoint."""
        ...

    @property
    def storage(self) -> IStorage: ...

    @property
    def tracker(self) -> ITracker: ...

    @property
    def buffer(self) -> EventBuffer: ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or Settings.from_env()
        if db_path is not None:
            settings = replace(settings, db_path=db_path)
        self._settings = settings
        self._db_path = resolve_db_path(self._settings.db_path)

        # Components (will be initialized in start())
        self._storage: IStorage | None = None
        self._buffer: EventBuffer | None = None
        self._privacy: PrivacyFilter | None = None
        self._sink: IAnalyticsSink | None = None
        self._tracker: AnalyticsTracker | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Storage (no dependencies)
        self._storage = Storage(self._db_path)
        await self._storage.init()
        logger.info("Storage initialized")

        # 2. Local buffer (depends on Storage)
        self._buffer = EventBuffer(self._storage)

        # 3. Privacy filter
        self._privacy = PrivacyFilter(strict=self._settings.strict_privacy)

        # 4. Vendor sink (may be None: debug log only)
        self._sink = self._build_sink()

        # 5. Tracker (depends on sink + privacy filter)
        self._tracker = AnalyticsTracker(sink=self._sink, privacy_filter=self._privacy)
        logger.info(
            "Tracker initialized (vendor=%s)",
            self._settings.vendor if self._sink else "none",
        )

    def _build_sink(self) -> IAnalyticsSink | None:
        vendor = self._settings.vendor

        if vendor == VENDOR_POSTHOG:
            return build_posthog_sink(self._settings)

        if vendor == VENDOR_COLLECTOR:
            if not self._settings.endpoint:
                logger.warning("ANALYTICS_ENDPOINT not set, collector disabled")
                return None
            return CollectorSink(
                buffer=self._buffer,
                uploader=BatchUploader(self._settings.endpoint),
                batch_size=self._settings.batch_size,
                max_buffered=self._settings.max_buffered,
            )

        return None

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._tracker:
            await self._tracker.close()
            logger.info("Tracker closed")
        if self._storage:
            await self._storage.close()
            logger.info("Storage closed")

    async def reset(self) -> None:
        """Drop buffered and collected events."""
        if self._storage:
            await self._storage.clear()
            logger.info("Storage cleared")

    async def collect(self, raw_events: list[dict[str, Any]]) -> int:
        """Accept a batch posted to the collection endpoint.

        Every event is re-checked against the privacy filter; malformed events
        are skipped. Returns the number of events accepted.
        """
        events: list[AnalyticsEvent] = []
        for raw in raw_events:
            try:
                event = AnalyticsEvent.from_dict(raw)
                event.name = validate_event_name(event.name)
                event.properties = self.privacy_filter.sanitize(
                    event.name, event.properties
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed collected event: %s", e)
                continue
            except PrivacyViolationError as e:
                logger.warning("Skipping collected event: %s", e)
                continue
            events.append(event)

        stored = await self.storage.save_collected_events(events)
        logger.info("Collected %s events (%s new)", len(events), stored)
        return len(events)

    @property
    def storage(self) -> IStorage:
        """Get storage instance."""
        if not self._storage:
            raise RuntimeError("Application not started")
        return self._storage

    @property
    def buffer(self) -> EventBuffer:
        """Get local event buffer."""
        if not self._buffer:
            raise RuntimeError("Application not started")
        return self._buffer

    @property
    def privacy_filter(self) -> PrivacyFilter:
        """Get privacy filter."""
        if not self._privacy:
            raise RuntimeError("Application not started")
        return self._privacy

    @property
    def tracker(self) -> AnalyticsTracker:
        """Get tracker instance."""
        if not self._tracker:
            raise RuntimeError("Application not started")
        return self._tracker
