"""Tool handlers for Linear MCP."""

from .base import BaseHandler, ToolResult
from .issues import IssueHandler

__all__ = ["BaseHandler", "IssueHandler", "ToolResult"]
