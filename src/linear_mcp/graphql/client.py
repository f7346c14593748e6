"""Async GraphQL transport for the Linear API.

Linear reports most request failures as a GraphQL ``errors`` array, often
with HTTP 400 rather than 200, and tags them with ``extensions.code``
(``RATELIMITED``, ``AUTHENTICATION_ERROR``, ...). The body is therefore read
before the status code, so the backend's own message reaches the caller.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..exceptions import (
    LinearAPIError,
    LinearAuthError,
    LinearNotFoundError,
    LinearRateLimitError,
    LinearTimeoutError,
)
from .http_client import get_http_client
from .retry import RetryPolicy, parse_retry_after, retry_with_backoff

logger = logging.getLogger(__name__)

RATE_LIMITED = "RATELIMITED"
AUTH_ERROR_CODES = frozenset({"AUTHENTICATION_ERROR", "FORBIDDEN"})


def _json_body(response: httpx.Response) -> Optional[Dict[str, Any]]:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _error_codes(errors: List[Any]) -> List[str]:
    codes = []
    for error in errors:
        extensions = error.get("extensions") if isinstance(error, dict) else None
        if isinstance(extensions, dict) and extensions.get("code"):
            codes.append(str(extensions["code"]))
    return codes


def _error_messages(errors: List[Any]) -> str:
    return "; ".join(
        error.get("message", "Unknown error") if isinstance(error, dict) else str(error)
        for error in errors
    )


def check_response(response: httpx.Response) -> Dict[str, Any]:
    """Return the ``data`` mapping of a Linear reply, or raise.

    Raises:
        LinearRateLimitError: HTTP 429 or a ``RATELIMITED`` error code.
        LinearAuthError: HTTP 401/403 or an authentication error code.
        LinearAPIError: Any other GraphQL errors (message preserved), or an
            error status without a GraphQL body.
        LinearNotFoundError: HTTP 404 without a GraphQL body.
    """
    status = response.status_code
    body = _json_body(response)
    errors = (body or {}).get("errors") or []
    codes = _error_codes(errors)
    messages = _error_messages(errors)

    if status == 429 or RATE_LIMITED in codes:
        raise LinearRateLimitError(
            f"Rate limited: {messages or f'HTTP {status}'}",
            retry_after=parse_retry_after(response.headers),
        )
    if status in (401, 403) or AUTH_ERROR_CODES.intersection(codes):
        raise LinearAuthError(f"Authentication failed: {messages or f'HTTP {status}'}")
    if errors:
        logger.debug("GraphQL errors (HTTP %d): %s", status, messages)
        raise LinearAPIError(
            f"GraphQL error: {messages}",
            status_code=status,
            response_body=str(errors)[:500],
        )
    if status == 404:
        raise LinearNotFoundError("Not found: HTTP 404")
    if status >= 400:
        raise LinearAPIError(
            f"API error: HTTP {status}",
            status_code=status,
            response_body=response.text[:500],
        )

    return (body or {}).get("data") or {}


class GraphQLClient:
    """Posts GraphQL documents to one endpoint through the shared HTTP client."""

    def __init__(
        self,
        endpoint: str,
        auth_header: str = "Authorization",
        auth_value: str = "",
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.endpoint = endpoint
        self.auth_header = auth_header
        self.auth_value = auth_value
        self.retry_policy = retry_policy or RetryPolicy()

    async def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await get_http_client().post(
                self.endpoint,
                json=payload,
                headers={
                    self.auth_header: self.auth_value,
                    "Content-Type": "application/json",
                },
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LinearTimeoutError(f"Request to Linear failed: {type(exc).__name__}") from exc
        return check_response(response)

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Execute a query or mutation and return its ``data`` mapping.

        Raises:
            LinearTransportError: See ``check_response``; raised after the
                retry policy has given up on retryable failures.
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        return await retry_with_backoff(lambda: self._post(payload), self.retry_policy)
