"""Tests for the logging setup."""

from __future__ import annotations

import json
import logging
import os
from unittest.mock import patch

import pytest
import structlog

from distindexer.core.logging import _handler_config, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    package = logging.getLogger("distindexer")
    handlers, level, package_level = root.handlers[:], root.level, package.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    package.setLevel(package_level)


class TestHandlerConfig:
    def test_levels(self):
        config = _handler_config("DEBUG", "console")
        assert config["root"]["level"] == "DEBUG"
        assert config["loggers"]["distindexer"] == {"level": "DEBUG"}
        assert config["loggers"]["httpx"] == {"level": "WARNING"}
        assert config["handlers"]["stderr"]["stream"] == "ext://sys.stderr"

    def test_json_renderer_selected(self):
        processors = _handler_config("INFO", "json")["formatters"]["events"]["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_by_default(self):
        processors = _handler_config("INFO", "console")["formatters"]["events"]["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


class TestSetupLogging:
    def test_json_events_on_stderr(self, capsys, restore_logging):
        with patch.dict(os.environ, {"DIST_INDEXER_LOG_FORMAT": "json"}):
            setup_logging("debug")
        structlog.get_logger("distindexer.test").info("run.complete", records=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event["event"] == "run.complete"
        assert event["records"] == 3
        assert event["level"] == "info"
        assert event["logger"] == "distindexer.test"
        assert logging.getLogger("distindexer").level == logging.DEBUG
