"""
Unit tests for structured logging configuration.

Tests cover:
- Application context processor
- JSON and console rendering of log events
- Service name binding
"""

import json
import logging

import pytest
import structlog

from shared.logging import configure_logging, get_logger
from shared.logging.structured_logger import APP_NAME, add_app_context


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestAddAppContext:
    """Tests for the add_app_context processor."""

    def test_adds_app_name(self):
        event = add_app_context(None, "info", {"event": "server_running"})

        assert event["app"] == APP_NAME

    def test_keeps_existing_app_key(self):
        event = add_app_context(None, "info", {"event": "x", "app": "other"})

        assert event["app"] == "other"


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_renders_json_events(self, caplog):
        configure_logging(log_level="INFO", json_logs=True, service_name="Formula Service")
        caplog.set_level(logging.INFO, logger="tests.logging")

        get_logger("tests.logging").info("server_running", port=3000)

        record = json.loads(caplog.records[-1].getMessage())
        assert record["event"] == "server_running"
        assert record["port"] == 3000
        assert record["level"] == "info"
        assert record["logger"] == "tests.logging"
        assert record["service"] == "Formula Service"
        assert record["app"] == APP_NAME
        assert "timestamp" in record

    def test_console_rendering(self, caplog):
        configure_logging(log_level="INFO", json_logs=False)
        caplog.set_level(logging.INFO, logger="tests.console")

        get_logger("tests.console").info("server_running", port=3000)

        message = caplog.records[-1].getMessage()
        assert "server_running" in message
        with pytest.raises(json.JSONDecodeError):
            json.loads(message)
