"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "planner_analytics.db"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_POSTHOG_HOST = "https://us.i.posthog.com"
DEFAULT_BATCH_SIZE = 10
DEFAULT_MAX_BUFFERED = 1000

VENDOR_NONE = "none"
VENDOR_POSTHOG = "posthog"
VENDOR_COLLECTOR = "collector"
VENDORS = (VENDOR_NONE, VENDOR_POSTHOG, VENDOR_COLLECTOR)


PathLike = Union[str, Path]


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


def _env_list(name: str) -> tuple[str, ...]:
    value = os.getenv(name, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass
class Settings:
    """Runtime settings for analytics delivery."""

    vendor: str = VENDOR_NONE
    posthog_api_key: str | None = None
    posthog_host: str = DEFAULT_POSTHOG_HOST
    endpoint: str | None = None  # DIY collection endpoint
    batch_size: int = DEFAULT_BATCH_SIZE
    max_buffered: int = DEFAULT_MAX_BUFFERED
    strict_privacy: bool = False
    db_path: PathLike | None = None
    cors_origins: tuple[str, ...] = ()  # collector API callers

    def __post_init__(self) -> None:
        self.vendor = self.vendor.strip().lower()
        if self.vendor not in VENDORS:
            raise ValueError(
                f"Unknown analytics vendor {self.vendor!r}, expected one of {VENDORS}"
            )
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        if self.max_buffered < self.batch_size:
            raise ValueError("max_buffered must not be smaller than batch_size")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ANALYTICS_* / POSTHOG_* environment variables."""
        return cls(
            vendor=os.getenv("ANALYTICS_VENDOR", VENDOR_NONE),
            posthog_api_key=os.getenv("POSTHOG_PROJECT_API_KEY") or None,
            posthog_host=os.getenv("POSTHOG_HOST", DEFAULT_POSTHOG_HOST),
            endpoint=os.getenv("ANALYTICS_ENDPOINT") or None,
            batch_size=_env_int("ANALYTICS_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            max_buffered=_env_int("ANALYTICS_MAX_BUFFERED", DEFAULT_MAX_BUFFERED),
            strict_privacy=_env_bool("ANALYTICS_STRICT_PRIVACY"),
            db_path=resolve_db_path(os.getenv("DATABASE_URL")),
            cors_origins=_env_list("API_CORS_ORIGINS"),
        )
