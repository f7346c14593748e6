"""Handler base class and the tool result type."""

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from mcp import types

from ..auth import LinearAuth
from ..config import Settings, get_settings
from ..exceptions import LinearMCPError
from ..graphql.linear import LinearGraphQLClient
from .validation import validate_required_params

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: rendered text, or a tagged error."""

    text: str
    is_error: bool = False
    error: Optional[BaseException] = None
    data: Any = None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def structured(cls, data: Any) -> "ToolResult":
        return cls(text=json.dumps(data, indent=2), data=data)

    @classmethod
    def failure(cls, message: str, error: Optional[BaseException] = None) -> "ToolResult":
        return cls(text=message, is_error=True, error=error)

    def to_content(self) -> List[types.TextContent]:
        return [types.TextContent(type="text", text=self.text)]


class BaseHandler:
    """Shared plumbing for tool handlers.

    The auth handle is supplied by the server; handlers keep no other state
    between calls.
    """

    def __init__(self, auth: LinearAuth, settings: Optional[Settings] = None):
        self.auth = auth
        self.settings = settings or get_settings()

    def verify_auth(self) -> LinearGraphQLClient:
        return self.auth.verify_auth()

    def validate_required_params(
        self, args: Mapping[str, Any], required: Sequence[str], prefix: str = ""
    ) -> None:
        validate_required_params(args, required, prefix)

    def create_response(self, text: str) -> ToolResult:
        return ToolResult.success(text)

    def create_json_response(self, data: Any) -> ToolResult:
        return ToolResult.structured(data)

    def handle_error(self, error: Exception, operation: str) -> ToolResult:
        """Log ``error`` and turn it into a failure tagged with ``operation``."""
        prefix = f"Failed to {operation}"
        message = str(error) or type(error).__name__
        if not message.startswith(prefix):
            message = f"{prefix}: {message}"

        if isinstance(error, LinearMCPError):
            logger.error("%s (%s)", message, type(error).__name__)
        else:
            logger.exception("Unexpected error during %s", operation)

        return ToolResult.failure(message, error=error)
