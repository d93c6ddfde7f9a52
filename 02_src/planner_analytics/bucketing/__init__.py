"""Bucketing module."""

from .bucketing import (
    ACCOUNT_COUNT,
    ROW_COUNT,
    SUCCESS_RATE,
    YEARS,
    Bucket,
    Bucketing,
    bucket,
)

__all__ = [
    "Bucket",
    "Bucketing",
    "bucket",
    "SUCCESS_RATE",
    "ROW_COUNT",
    "YEARS",
    "ACCOUNT_COUNT",
]
