"""Tests for log formatters and call-scoped log context."""

import json
import logging
import sys

import pytest

from linear_mcp.observability.logging import (
    HumanReadableFormatter,
    StructuredFormatter,
    clear_log_context,
    configure_logging,
    set_log_context,
)


def _record(message="Tool call finished", level=logging.INFO):
    return logging.LogRecord("linear_mcp.server", level, __file__, 1, message, None, None)


@pytest.fixture(autouse=True)
def reset_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestStructuredFormatter:
    def test_without_context(self):
        entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "linear_mcp.server"
        assert entry["message"] == "Tool call finished"
        assert "tool_name" not in entry
        assert "request_id" not in entry

    def test_with_context(self):
        set_log_context(tool_name="linear_delete_issue", request_id="abc123")

        entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["tool_name"] == "linear_delete_issue"
        assert entry["request_id"] == "abc123"


class TestHumanReadableFormatter:
    def test_context_suffix(self):
        set_log_context(tool_name="linear_add_comment", request_id="r1")

        line = HumanReadableFormatter().format(_record(level=logging.WARNING))

        assert "WARNING" in line
        assert line.endswith("[tool=linear_add_comment, req=r1]")

    def test_context_cleared(self):
        set_log_context(tool_name="linear_add_comment")
        clear_log_context()

        assert "tool=" not in HumanReadableFormatter().format(_record())


class TestConfigureLogging:
    def test_writes_to_stderr(self, restore_root_logger):
        configure_logging(environment="development", log_level="debug")

        handler = restore_root_logger.handlers[-1]
        assert handler.stream is sys.stderr
        assert isinstance(handler.formatter, HumanReadableFormatter)
        assert restore_root_logger.level == logging.DEBUG

    def test_production_uses_json(self, restore_root_logger):
        configure_logging(environment="production", log_level="INFO")

        assert isinstance(restore_root_logger.handlers[-1].formatter, StructuredFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
