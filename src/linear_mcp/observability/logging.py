"""Structured logging configuration for Linear MCP.

Provides JSON-formatted structured logging with contextual fields
(tool_name, request_id) via contextvars. Output goes to stderr because
stdout carries the MCP stdio transport.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Optional

# Context variables for call-scoped logging fields
_tool_name: ContextVar[Optional[str]] = ContextVar("tool_name", default=None)
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def set_log_context(
    tool_name: Optional[str] = None,
    request_id: Optional[str] = None,
):
    """Set contextual logging fields for the current async context."""
    if tool_name is not None:
        _tool_name.set(tool_name)
    if request_id is not None:
        _request_id.set(request_id)


def clear_log_context():
    """Clear all contextual logging fields."""
    _tool_name.set(None)
    _request_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter with context fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        tool = _tool_name.get()
        if tool:
            log_entry["tool_name"] = tool

        request_id = _request_id.get()
        if request_id:
            log_entry["request_id"] = request_id

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


class HumanReadableFormatter(logging.Formatter):
    """Human-readable log formatter with context fields for development."""

    def format(self, record: logging.LogRecord) -> str:
        parts = [
            f"[{self.formatTime(record, self.datefmt)}]",
            f"{record.levelname:8s}",
            f"{record.name}:",
            record.getMessage(),
        ]

        ctx_parts = []
        tool = _tool_name.get()
        if tool:
            ctx_parts.append(f"tool={tool}")
        request_id = _request_id.get()
        if request_id:
            ctx_parts.append(f"req={request_id}")

        if ctx_parts:
            parts.append(f"[{', '.join(ctx_parts)}]")

        msg = " ".join(parts)

        if record.exc_info and record.exc_info[1]:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def configure_logging(environment: str = "development", log_level: str = "INFO"):
    """Configure structured logging for the server process.

    Args:
        environment: "production" for JSON output, anything else for human-readable.
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)

    if environment == "production":
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger.addHandler(handler)

    # Quiet noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("mcp").setLevel(logging.WARNING)
