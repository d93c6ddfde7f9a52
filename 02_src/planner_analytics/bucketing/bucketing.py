"""Bucketing of sensitive numbers into labelled ranges."""

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Bucket:
    """A labelled range: lower inclusive, upper exclusive (None = unbounded)."""

    lower: float
    upper: float | None
    label: str


class Bucketing:
    """Ordered, contiguous set of buckets mapping a number to a label."""

    def __init__(self, buckets: Sequence[Bucket]):
        if not buckets:
            raise ValueError("Bucketing needs at least one bucket")

        for i, b in enumerate(buckets):
            if b.upper is None and i != len(buckets) - 1:
                raise ValueError("Only the last bucket may be unbounded")
            if b.upper is not None and b.upper <= b.lower:
                raise ValueError(f"Bucket {b.label!r} has upper <= lower")
            if i > 0 and buckets[i - 1].upper != b.lower:
                raise ValueError(
                    f"Buckets {buckets[i - 1].label!r} and {b.label!r} are not contiguous"
                )

        self._buckets = tuple(buckets)

    @property
    def labels(self) -> list[str]:
        return [b.label for b in self._buckets]

    def label(self, value: float) -> str:
        """Return the label of the bucket containing value.

        Values outside the covered range clamp to the first or last bucket.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Cannot bucket {type(value).__name__}")
        if math.isnan(value):
            raise ValueError("Cannot bucket NaN")

        if value < self._buckets[0].lower:
            return self._buckets[0].label

        for b in self._buckets:
            if b.upper is None or value < b.upper:
                return b.label

        return self._buckets[-1].label

    def __contains__(self, label: str) -> bool:
        return label in self.labels

    def __repr__(self) -> str:
        return f"Bucketing({self.labels!r})"


def bucket(value: float, bucketing: Bucketing) -> str:
    """Shortcut for bucketing.label(value)."""
    return bucketing.label(value)


# Simulation success rate in percent: 85 -> "70-89%"
SUCCESS_RATE = Bucketing(
    [
        Bucket(0, 50, "0-49%"),
        Bucket(50, 70, "50-69%"),
        Bucket(70, 90, "70-89%"),
        Bucket(90, None, "90-100%"),
    ]
)

# Rows in an uploaded CSV
ROW_COUNT = Bucketing(
    [
        Bucket(0, 1, "0"),
        Bucket(1, 101, "1-100"),
        Bucket(101, 1001, "101-1000"),
        Bucket(1001, 10001, "1001-10000"),
        Bucket(10001, None, "10000+"),
    ]
)

# Planning horizon
YEARS = Bucketing(
    [
        Bucket(0, 5, "0-4 years"),
        Bucket(5, 10, "5-9 years"),
        Bucket(10, 20, "10-19 years"),
        Bucket(20, 30, "20-29 years"),
        Bucket(30, None, "30+ years"),
    ]
)

# Linked accounts
ACCOUNT_COUNT = Bucketing(
    [
        Bucket(0, 1, "0"),
        Bucket(1, 2, "1"),
        Bucket(2, 5, "2-4"),
        Bucket(5, 10, "5-9"),
        Bucket(10, None, "10+"),
    ]
)
