"""PostHog vendor sink."""

from posthog import Posthog

from ..config import Settings
from ..logging_config import get_logger
from ..models import AnalyticsEvent

logger = get_logger(__name__)

ANONYMOUS_DISTINCT_ID = "anonymous"


class PostHogSink:
    """Forwards events to PostHog without creating person profiles."""

    def __init__(self, client: Posthog):
        self._client = client

    async def capture(self, event: AnalyticsEvent) -> None:
        properties = dict(event.properties)
        properties["$process_person_profile"] = False
        if event.session_id:
            properties["$session_id"] = event.session_id

        # The PostHog client queues and sends from its own thread
        self._client.capture(
            event=event.name,
            distinct_id=event.session_id or ANONYMOUS_DISTINCT_ID,
            properties=properties,
            timestamp=event.timestamp,
            uuid=event.id,
        )

    async def flush(self) -> None:
        self._client.flush()

    async def close(self) -> None:
        self._client.shutdown()


def build_posthog_sink(settings: Settings) -> PostHogSink | None:
    """Create the PostHog sink, or None when no project key is configured."""
    if not settings.posthog_api_key:
        logger.warning("POSTHOG_PROJECT_API_KEY not set, PostHog disabled")
        return None

    client = Posthog(
        settings.posthog_api_key,
        host=settings.posthog_host,
    )
    logger.info("PostHog sink configured for %s", settings.posthog_host)
    return PostHogSink(client)
