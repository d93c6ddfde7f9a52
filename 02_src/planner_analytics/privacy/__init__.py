"""Privacy module."""

from .privacy import (
    MAX_EVENT_NAME_LENGTH,
    MAX_STRING_LENGTH,
    PrivacyFilter,
    is_sensitive_key,
    validate_event_name,
    value_problem,
)

__all__ = [
    "PrivacyFilter",
    "is_sensitive_key",
    "value_problem",
    "validate_event_name",
    "MAX_EVENT_NAME_LENGTH",
    "MAX_STRING_LENGTH",
]
