"""Exception types for Linear MCP.

Handler-level errors (validation, unresolved references, backend-reported
failures) and transport-level errors raised by the GraphQL client. The issue
handler catches all of them once per tool call and turns them into an error
result tagged with the operation name.
"""

from typing import Optional


class LinearMCPError(Exception):
    """Base exception for all Linear MCP errors."""


class ValidationError(LinearMCPError):
    """A required request field is missing or empty."""

    def __init__(self, message: str, field: str = ""):
        self.field = field
        super().__init__(message)


class UnresolvedReferenceError(LinearMCPError):
    """A human-readable reference (e.g. a workflow-state name) matched nothing."""

    def __init__(self, message: str, reference: str = ""):
        self.reference = reference
        super().__init__(message)


class OperationFailedError(LinearMCPError):
    """Linear reported success=false, or omitted the payload on success."""


class LinearTransportError(LinearMCPError):
    """Base class for failures raised by the GraphQL transport."""


class LinearAuthError(LinearTransportError):
    """No session, or authentication/authorization failure (401/403)."""


class LinearRateLimitError(LinearTransportError):
    """Rate limit exceeded (429). Includes retry_after hint if available."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        self.retry_after = retry_after
        super().__init__(message)


class LinearAPIError(LinearTransportError):
    """API returned an error response (4xx/5xx) or GraphQL errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: str = "",
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class LinearNotFoundError(LinearAPIError):
    """Resource not found (404)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class LinearTimeoutError(LinearTransportError):
    """Request timed out or the connection failed after retries."""
