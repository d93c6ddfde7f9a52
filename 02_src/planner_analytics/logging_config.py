"""JSON logging for the collector service and the tracker's debug-log fallback."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

# Logger that receives "analytics event ..." records when no vendor is set
TRACKER_LOGGER = "planner_analytics.tracker"

# Client libraries that log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "posthog")


class JSONFormatter(logging.Formatter):
    """One JSON object per record; analytics context goes under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context is not None:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    analytics_log_level: str | None = None,
) -> None:
    """
    Configure root logging with JSON output to a rotating file and stdout.

    Args:
        log_level: Root level. Defaults to LOG_LEVEL or INFO.
        log_file: Defaults to 04_logs/app.log.
        analytics_log_level: Level of the tracker logger. Defaults to
            ANALYTICS_LOG_LEVEL, else the root level. Set DEBUG to see
            events the tracker would have sent.
    """
    log_level = (log_level or os.getenv("LOG_LEVEL") or "INFO").upper()
    analytics_log_level = (
        analytics_log_level or os.getenv("ANALYTICS_LOG_LEVEL") or log_level
    ).upper()

    log_path = Path(log_file or DEFAULT_LOG_PATH)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    loggers = {name: {"level": "WARNING"} for name in QUIET_LOGGERS}
    loggers[TRACKER_LOGGER] = {"level": analytics_log_level}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "planner_analytics.logging_config.JSONFormatter"},
            },
            "handlers": {
                "file": {
                    "class": "logging.handlers.RotatingFileHandler",
                    "filename": str(log_path),
                    "maxBytes": 10 * 1024 * 1024,
                    "backupCount": 5,
                    "formatter": "json",
                    "encoding": "utf-8",
                },
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": loggers,
            "root": {"level": log_level, "handlers": ["file", "console"]},
        }
    )


def get_logger(name: str) -> logging.Logger:
    """Module logger, e.g. get_logger(__name__)."""
    return logging.getLogger(name)
