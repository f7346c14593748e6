"""Logging setup for Linear MCP."""

from .logging import clear_log_context, configure_logging, set_log_context

__all__ = ["clear_log_context", "configure_logging", "set_log_context"]
