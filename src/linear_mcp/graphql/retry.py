"""Retry policy for Linear requests.

The transport classifies every failed response into a LinearTransportError
before this module sees it, so retry decisions are made on error types:
rate limits, timeouts and 5xx responses are retried, everything else is
raised on the first attempt. The handler layer never retries.
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional

from ..exceptions import (
    LinearAPIError,
    LinearRateLimitError,
    LinearTimeoutError,
    LinearTransportError,
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 30.0


@dataclass(frozen=True)
class RetryPolicy:
    """How many times, and how long between, a failed request is retried."""

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    max_delay: float = DEFAULT_MAX_DELAY

    @classmethod
    def from_settings(cls, settings) -> "RetryPolicy":
        return cls(
            max_retries=settings.http_max_retries,
            base_delay=settings.http_retry_base_delay,
            max_delay=settings.http_retry_max_delay,
        )

    def backoff(self, attempt: int, retry_after: Optional[float] = None) -> float:
        """Seconds to wait before retry number ``attempt + 1``.

        A server-supplied ``retry_after`` is honoured up to ``max_delay``;
        otherwise full jitter over ``base_delay * 2**attempt``.
        """
        if retry_after is not None:
            return min(retry_after, self.max_delay)
        return random.uniform(0, min(self.base_delay * (2**attempt), self.max_delay))


def is_retryable(error: LinearTransportError) -> bool:
    if isinstance(error, (LinearRateLimitError, LinearTimeoutError)):
        return True
    return isinstance(error, LinearAPIError) and error.status_code in RETRYABLE_STATUS_CODES


def parse_retry_after(headers: Mapping[str, str]) -> Optional[float]:
    """Retry-After in seconds; HTTP-date values are ignored."""
    value = headers.get("Retry-After") or headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


async def retry_with_backoff(
    fn: Callable[[], Awaitable[Any]],
    policy: Optional[RetryPolicy] = None,
) -> Any:
    """Await ``fn()`` until it succeeds or the policy gives up.

    Raises:
        LinearTransportError: The last error, unchanged, once it is not
            retryable or ``policy.max_retries`` retries have been spent.
    """
    policy = policy or RetryPolicy()

    attempt = 0
    while True:
        try:
            return await fn()
        except LinearTransportError as exc:
            if attempt >= policy.max_retries or not is_retryable(exc):
                raise

            delay = policy.backoff(attempt, getattr(exc, "retry_after", None))
            attempt += 1
            logger.warning(
                "Linear request failed with %s (retry %d/%d in %.1fs): %s",
                type(exc).__name__,
                attempt,
                policy.max_retries,
                delay,
                exc,
            )
            await asyncio.sleep(delay)
