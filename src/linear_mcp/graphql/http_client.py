"""Shared pooled HTTP client for the GraphQL transport."""

import logging
from typing import Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the process-wide AsyncClient, creating it on first use."""
    global _http_client

    if _http_client is None or _http_client.is_closed:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            headers={"User-Agent": f"{settings.app_name}/{settings.app_version}"},
        )
        logger.debug("Created shared HTTP client (timeout=%.1fs)", settings.http_timeout)

    return _http_client


async def close_http_client() -> None:
    """Close the shared client. Safe to call when none was created."""
    global _http_client

    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        logger.debug("Closed shared HTTP client")
    _http_client = None
