"""Planner Analytics: privacy-safe event tracking for the planning suite."""

from .app import Application, IApplication
from .bucketing import (
    ACCOUNT_COUNT,
    ROW_COUNT,
    SUCCESS_RATE,
    YEARS,
    Bucket,
    Bucketing,
    bucket,
)
from .buffer import BatchUploader, EventBuffer, IBatchUploader, IEventBuffer
from .config import Settings
from .exceptions import (
    AnalyticsError,
    InvalidEventError,
    PrivacyViolationError,
    StorageNotInitializedError,
)
from .funnels import compute_funnel
from .models import AnalyticsEvent, BufferedEvent, FunnelReport, FunnelStep
from .privacy import PrivacyFilter, validate_event_name
from .sinks import CollectorSink, IAnalyticsSink, PostHogSink, build_posthog_sink
from .storage import IStorage, Storage
from .tracker import AnalyticsTracker, ITracker

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "AnalyticsEvent",
    "BufferedEvent",
    "FunnelStep",
    "FunnelReport",
    # Bucketing
    "Bucket",
    "Bucketing",
    "bucket",
    "SUCCESS_RATE",
    "ROW_COUNT",
    "YEARS",
    "ACCOUNT_COUNT",
    # Privacy
    "PrivacyFilter",
    "validate_event_name",
    # Components
    "IStorage",
    "Storage",
    "IEventBuffer",
    "EventBuffer",
    "IBatchUploader",
    "BatchUploader",
    "IAnalyticsSink",
    "CollectorSink",
    "PostHogSink",
    "build_posthog_sink",
    "ITracker",
    "AnalyticsTracker",
    "compute_funnel",
    # Errors
    "AnalyticsError",
    "InvalidEventError",
    "PrivacyViolationError",
    "StorageNotInitializedError",
]
