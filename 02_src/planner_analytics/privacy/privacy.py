"""Privacy filter for analytics event properties.

Events may carry counts, flags, bucketed labels and short enumerated
strings. Raw dollar amounts, balances, transaction descriptions and
personal identifiers never leave the device.
"""

import math
import re
from typing import Any, Mapping

from ..exceptions import InvalidEventError, PrivacyViolationError
from ..logging_config import get_logger
from ..models import PropertyValue

logger = get_logger(__name__)

MAX_EVENT_NAME_LENGTH = 64
MAX_STRING_LENGTH = 64
MAX_NUMBER_DIGITS = 8  # longer integers look like account or card numbers

SENSITIVE_KEY_TOKENS = frozenset(
    {
        # money
        "amount",
        "balance",
        "price",
        "cost",
        "income",
        "salary",
        "payment",
        "paid",
        "spend",
        "spent",
        "dollars",
        "usd",
        "networth",
        # free text
        "description",
        "memo",
        "payee",
        "merchant",
        "note",
        "notes",
        "comment",
        # identifiers
        "email",
        "phone",
        "name",
        "firstname",
        "lastname",
        "address",
        "ssn",
        "ip",
        "password",
        "token",
        "iban",
        "routing",
    }
)

# "<owner>_id" style keys, e.g. user_id, accountId
IDENTIFIER_OWNERS = frozenset({"user", "customer", "account", "member", "client", "person"})
IDENTIFIER_SUFFIXES = frozenset({"id", "number", "num", "no"})

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SPLIT_RE = re.compile(r"[^a-z0-9]+")
_CURRENCY_RE = re.compile(
    r"^\s*[-+]?\s*[$€£¥]\s*\d|\d[\d,]*(?:\.\d+)?\s*(?:usd|eur|gbp|dollars?)\b",
    re.IGNORECASE,
)
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")
# Unbroken runs, or card-style groups like "4111 1111 1111 1111"
_DIGIT_RUN_RE = re.compile(r"\d{9,}|(?:\d{4}[ -]){2,}\d{2,4}")


def _key_tokens(key: str) -> list[str]:
    spaced = _CAMEL_RE.sub("_", key).lower()
    return [t for t in _SPLIT_RE.split(spaced) if t]


def is_sensitive_key(key: str) -> bool:
    """True when a property key names money, free text or an identifier."""
    tokens = _key_tokens(key)
    if any(t in SENSITIVE_KEY_TOKENS for t in tokens):
        return True
    if "".join(tokens) in SENSITIVE_KEY_TOKENS:
        return True
    for owner, suffix in zip(tokens, tokens[1:]):
        if owner in IDENTIFIER_OWNERS and suffix in IDENTIFIER_SUFFIXES:
            return True
    return False


def value_problem(value: Any) -> str | None:
    """Return why a value may not be sent, or None when it is safe."""
    if value is None:
        return "empty value"
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return "non-finite number"
        if len(str(abs(int(value)))) > MAX_NUMBER_DIGITS:
            return "long digit run"
        return None
    if not isinstance(value, str):
        return f"unsupported type {type(value).__name__}"
    if len(value) > MAX_STRING_LENGTH:
        return "free text"
    if _CURRENCY_RE.search(value):
        return "currency amount"
    if _EMAIL_RE.search(value):
        return "email address"
    if _DIGIT_RUN_RE.search(value):
        return "long digit run"
    return None


def validate_event_name(name: Any) -> str:
    """Return the stripped event name or raise InvalidEventError."""
    if not isinstance(name, str):
        raise InvalidEventError(f"Event name must be a string, got {type(name).__name__}")
    stripped = name.strip()
    if not stripped:
        raise InvalidEventError("Event name must not be empty")
    if len(stripped) > MAX_EVENT_NAME_LENGTH:
        raise InvalidEventError(
            f"Event name longer than {MAX_EVENT_NAME_LENGTH} characters"
        )
    return stripped


class PrivacyFilter:
    """Drops (or, in strict mode, rejects) properties unsafe to transmit."""

    def __init__(self, strict: bool = False):
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def sanitize(
        self, name: str, properties: Mapping[Any, Any] | None
    ) -> dict[str, PropertyValue]:
        """Return the safe subset of properties for event `name`."""
        if not properties:
            return {}

        safe: dict[str, PropertyValue] = {}
        rejected: list[str] = []

        for key, value in properties.items():
            if not isinstance(key, str):
                reason = "non-string key"
            elif is_sensitive_key(key):
                reason = "sensitive key"
            else:
                reason = value_problem(value)

            if reason is None:
                safe[key] = value
                continue

            rejected.append(str(key))
            # Never log the value itself
            logger.warning(
                "Dropping property %r from event %r: %s", str(key), name, reason
            )

        if rejected and self._strict:
            raise PrivacyViolationError(name, rejected)

        return safe
