"""Tracker: the single entry point call sites use to report events."""

from typing import Any, Mapping, Protocol

from ..bucketing import Bucketing
from ..exceptions import InvalidEventError
from ..logging_config import get_logger
from ..models import AnalyticsEvent
from ..privacy import PrivacyFilter, validate_event_name
from ..sinks import IAnalyticsSink

logger = get_logger(__name__)


class ITracker(Protocol):
    """Report analytics events. Failures never reach the caller."""

    async def track(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        session_id: str | None = None,
    ) -> AnalyticsEvent | None:
        """Sanitize and forward an event to the vendor, or log it."""
        ...

    async def flush(self) -> None:
        """Flush the vendor sink."""
        ...

    async def close(self) -> None:
        """Flush and release the vendor sink."""
        ...


class AnalyticsTracker:
    """Forwards events to a vendor sink, or to the debug log when none is wired up."""

    def __init__(
        self,
        sink: IAnalyticsSink | None = None,
        privacy_filter: PrivacyFilter | None = None,
    ):
        self._sink = sink
        self._privacy = privacy_filter or PrivacyFilter()

    @property
    def sink(self) -> IAnalyticsSink | None:
        return self._sink

    async def track(
        self,
        name: str,
        properties: Mapping[str, Any] | None = None,
        session_id: str | None = None,
    ) -> AnalyticsEvent | None:
        """Sanitize and forward an event to the vendor, or log it.

        Returns the event as sent, or None when it was dropped. Raises only
        PrivacyViolationError when the privacy filter is strict.
        """
        try:
            name = validate_event_name(name)
        except InvalidEventError as e:
            logger.warning("Dropping analytics event: %s", e)
            return None

        event = AnalyticsEvent(
            name=name,
            properties=self._privacy.sanitize(name, properties),
            session_id=session_id,
        )

        if self._sink is None:
            logger.debug(
                "analytics event %s %s",
                event.name,
                event.properties,
                extra={"context": {"event_id": event.id, "session_id": event.session_id}},
            )
            return event

        try:
            await self._sink.capture(event)
        except Exception as e:
            # Tracking is best effort; the event is lost
            logger.warning("Analytics vendor failed for %r: %s", event.name, e)

        return event

    async def track_bucketed(
        self,
        name: str,
        metrics: Mapping[str, float],
        bucketings: Mapping[str, Bucketing],
        extra: Mapping[str, Any] | None = None,
        session_id: str | None = None,
    ) -> AnalyticsEvent | None:
        """Track an event whose numeric metrics are replaced by bucket labels.

        Each key of `metrics` must have a matching bucketing; a missing one is
        a programming error and raises KeyError. A metric that cannot be
        bucketed (NaN, non-numeric) is dropped. The exact value is never sent.
        """
        properties: dict[str, Any] = dict(extra or {})
        for key, value in metrics.items():
            if key not in bucketings:
                raise KeyError(f"No bucketing for metric {key!r}")
            try:
                properties[key] = bucketings[key].label(value)
            except (TypeError, ValueError):
                logger.warning("Dropping metric %r from event %r: not bucketable", key, name)

        return await self.track(name, properties, session_id=session_id)

    async def flush(self) -> None:
        """Flush the vendor sink."""
        if self._sink is None:
            return
        try:
            await self._sink.flush()
        except Exception as e:
            logger.warning("Analytics flush failed: %s", e)

    async def close(self) -> None:
        """Flush and release the vendor sink."""
        if self._sink is None:
            return
        try:
            await self._sink.close()
        except Exception as e:
            logger.warning("Analytics sink close failed: %s", e)
