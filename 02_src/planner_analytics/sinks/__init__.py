"""Analytics sinks: where tracked events go."""

from .base import IAnalyticsSink
from .collector import CollectorSink
from .posthog_sink import PostHogSink, build_posthog_sink

__all__ = [
    "IAnalyticsSink",
    "CollectorSink",
    "PostHogSink",
    "build_posthog_sink",
]
