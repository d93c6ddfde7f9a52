"""Tracker module."""

from .tracker import AnalyticsTracker, ITracker

__all__ = ["AnalyticsTracker", "ITracker"]
