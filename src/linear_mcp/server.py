"""MCP server exposing the Linear issue tools."""

import logging
import time
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from .auth import LinearAuth
from .config import Settings, get_settings
from .handlers.base import ToolResult
from .handlers.issues import IssueHandler
from .observability.logging import clear_log_context, set_log_context
from .tools import get_tools

logger = logging.getLogger(__name__)


class ToolCallError(Exception):
    """Raised at the MCP boundary so the client receives ``isError=true``."""


class LinearMCPServer:
    """Routes MCP tool calls to the issue handler."""

    def __init__(self, auth: LinearAuth, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.auth = auth
        self.issue_handler = IssueHandler(auth, self.settings)
        self.server = Server(self.settings.app_name)
        self._routes: Dict[str, Callable[[Dict[str, Any]], Awaitable[ToolResult]]] = {
            "linear_create_issue": self.issue_handler.handle_create_issue,
            "linear_create_issues": self.issue_handler.handle_create_issues,
            "linear_update_issue": self.issue_handler.handle_update_issue,
            "linear_bulk_update_issues": self.issue_handler.handle_bulk_update_issues,
            "linear_search_issues": self.issue_handler.handle_search_issues,
            "linear_delete_issue": self.issue_handler.handle_delete_issue,
            "linear_delete_issues": self.issue_handler.handle_delete_issues,
            "linear_add_comment": self.issue_handler.handle_add_comment,
            "linear_get_comments": self.issue_handler.handle_get_comments,
        }
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up MCP protocol handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return get_tools()

        @self.server.call_tool()
        async def handle_call_tool(
            name: str, arguments: Optional[Dict[str, Any]] = None
        ) -> List[types.TextContent]:
            result = await self.call_tool(name, arguments or {})
            if result.is_error:
                raise ToolCallError(result.text)
            return result.to_content()

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> ToolResult:
        """Run one tool call and return its result; never raises."""
        handler = self._routes.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return ToolResult.failure(f"Unknown tool: {name}")

        set_log_context(tool_name=name, request_id=uuid.uuid4().hex[:12])
        start = time.perf_counter()
        try:
            result = await handler(arguments)
            logger.info(
                "Tool call %s finished (status=%s, %.0fms)",
                name,
                "error" if result.is_error else "success",
                (time.perf_counter() - start) * 1000,
            )
            return result
        finally:
            clear_log_context()

    async def run_stdio(self) -> None:
        """Serve MCP over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
