"""Exceptions raised by Planner Analytics."""


class AnalyticsError(Exception):
    """Base class for analytics errors."""


class InvalidEventError(AnalyticsError, ValueError):
    """Event name is empty, not a string, or too long."""


class PrivacyViolationError(AnalyticsError):
    """Event properties carry values that must never leave the device."""

    def __init__(self, event_name: str, keys: list[str]):
        self.event_name = event_name
        self.keys = keys
        super().__init__(
            f"Event {event_name!r} has sensitive properties: {', '.join(keys)}"
        )


class StorageNotInitializedError(AnalyticsError, RuntimeError):
    """Storage used before init() or after close()."""

    def __init__(self) -> None:
        super().__init__("Storage not initialized")
