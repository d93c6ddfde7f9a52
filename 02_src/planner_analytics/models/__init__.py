"""Core data models for Planner Analytics."""

from .events import AnalyticsEvent, BufferedEvent, PropertyValue
from .funnels import FunnelReport, FunnelStep

__all__ = [
    # Events
    "AnalyticsEvent",
    "BufferedEvent",
    "PropertyValue",
    # Funnels
    "FunnelStep",
    "FunnelReport",
]
