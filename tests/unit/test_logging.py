"""Unit tests for structured logging setup."""

import logging

import pytest
import structlog

from risk_gateway.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_json_renderer(self):
        setup_logging(log_level="INFO", log_format="json")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer(self):
        setup_logging(log_level="INFO", log_format="console")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_root_level(self):
        setup_logging(log_level="warning", log_format="json")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(log_level="chatty", log_format="json")

        assert logging.getLogger().level == logging.INFO
