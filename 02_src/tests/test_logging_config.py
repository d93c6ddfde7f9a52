"""Tests for logging configuration."""

import json
import logging

import pytest

from planner_analytics.logging_config import (
    QUIET_LOGGERS,
    TRACKER_LOGGER,
    JSONFormatter,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    """Undo setup_logging() side effects on the root and named loggers."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    named = {name: logging.getLogger(name).level for name in (TRACKER_LOGGER, *QUIET_LOGGERS)}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in named.items():
        logging.getLogger(name).setLevel(lvl)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "planner_analytics.tracker.tracker",
        logging.DEBUG,
        __file__,
        10,
        "analytics event %s %s",
        ("CSV Uploaded", {"rows": "1-100"}),
        None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_formats_message(self):
        entry = json.loads(JSONFormatter().format(make_record()))

        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "planner_analytics.tracker.tracker"
        assert entry["message"] == "analytics event CSV Uploaded {'rows': '1-100'}"
        assert "context" not in entry

    def test_includes_context(self):
        record = make_record(context={"event_id": "e1", "session_id": None})

        entry = json.loads(JSONFormatter().format(record))

        assert entry["context"] == {"event_id": "e1", "session_id": None}


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_levels(self, tmp_path, restore_logging):
        setup_logging(
            log_level="warning",
            log_file=str(tmp_path / "logs" / "app.log"),
            analytics_log_level="debug",
        )

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger(TRACKER_LOGGER).level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert (tmp_path / "logs").is_dir()

    def test_analytics_level_from_env(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("ANALYTICS_LOG_LEVEL", "DEBUG")

        setup_logging(log_file=str(tmp_path / "app.log"))

        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger(TRACKER_LOGGER).level == logging.DEBUG

    def test_analytics_level_follows_root(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.delenv("ANALYTICS_LOG_LEVEL", raising=False)

        setup_logging(log_level="ERROR", log_file=str(tmp_path / "app.log"))

        assert logging.getLogger(TRACKER_LOGGER).level == logging.ERROR
