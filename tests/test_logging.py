"""Tests for the JSON log line format."""

import json
import logging

from compass.core.config import settings
from compass.core.logging import CustomJsonFormatter


def format_record(message: str, **extra) -> dict:
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(logger)s %(module)s %(function)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    record = logging.LogRecord(
        "compass.services.session_engine", logging.INFO, __file__, 1, message, None, None
    )
    record.__dict__.update(extra)
    return json.loads(formatter.format(record))


def test_line_carries_service_env_and_event():
    line = format_record("Session started", user_id="user-1", mode="mock")

    assert line["event"] == "Session started"
    assert line["service"] == settings.PROJECT_NAME
    assert line["env"] == settings.ENV
    assert line["level"] == "INFO"
    assert line["logger"] == "compass.services.session_engine"
    assert line["user_id"] == "user-1"
    assert line["mode"] == "mock"
    assert "message" not in line


def test_explicit_event_is_kept():
    line = format_record("Mock distribution underfilled", event="mock_underfilled")
    assert line["event"] == "mock_underfilled"
