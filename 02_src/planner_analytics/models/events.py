"""Analytics event data models."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Union

PropertyValue = Union[bool, int, float, str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class AnalyticsEvent:
    """A named occurrence reported to an analytics collector."""

    name: str  # e.g. "Budget Created"
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)
    id: str = field(default_factory=_new_id)
    session_id: str | None = None  # random per-session token, never a person

    def to_dict(self) -> dict[str, Any]:
        """Wire shape used by the collection endpoint."""
        return {
            "id": self.id,
            "name": self.name,
            "properties": dict(self.properties),
            "timestamp": self.timestamp.isoformat(),
            "session_id": self.session_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalyticsEvent":
        """Build an event from its wire shape.

        Raises KeyError, TypeError or ValueError when the shape is wrong.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Event must be an object, got {type(data).__name__}")

        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        if timestamp is None:
            timestamp = _utcnow()
        elif not isinstance(timestamp, datetime):
            raise TypeError(f"timestamp must be ISO-8601, got {type(timestamp).__name__}")
        elif timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)

        properties = data.get("properties") or {}
        if not isinstance(properties, dict):
            raise TypeError(f"properties must be an object, got {type(properties).__name__}")

        for key in ("id", "session_id"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise TypeError(f"{key} must be a string, got {type(data[key]).__name__}")

        return cls(
            name=data["name"],
            properties=dict(properties),
            timestamp=timestamp,
            id=data.get("id") or _new_id(),
            session_id=data.get("session_id"),
        )


@dataclass
class BufferedEvent:
    """An event waiting in the local buffer."""

    seq: int  # insertion order in the buffer
    event: AnalyticsEvent
