"""Linear session provider.

``LinearAuth`` owns the credential and the ready ``LinearGraphQLClient``.
The server builds one instance at startup and passes it to each handler.
"""

import logging
from typing import Optional

from .config import Settings
from .exceptions import LinearAuthError
from .graphql.linear import LINEAR_API, LinearGraphQLClient
from .graphql.retry import RetryPolicy

logger = logging.getLogger(__name__)


class LinearAuth:
    """Holds an authenticated Linear client for the lifetime of the server."""

    def __init__(
        self,
        endpoint: str = LINEAR_API,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        self.endpoint = endpoint
        self.retry_policy = retry_policy or RetryPolicy()
        self._client: Optional[LinearGraphQLClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "LinearAuth":
        """Build and initialize from configuration.

        Leaves the session unestablished when no credential is configured;
        tool calls then fail at ``verify_auth``.
        """
        auth = cls(
            endpoint=settings.linear_api_url,
            retry_policy=RetryPolicy.from_settings(settings),
        )
        if settings.linear_api_key or settings.linear_access_token:
            auth.initialize(
                api_key=settings.linear_api_key,
                access_token=settings.linear_access_token,
            )
        else:
            logger.warning("No LINEAR_API_KEY or LINEAR_ACCESS_TOKEN configured")
        return auth

    def initialize(
        self,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
    ) -> None:
        """Establish the session.

        Personal API keys go verbatim into ``Authorization``; OAuth access
        tokens are sent as ``Bearer <token>``. The API key wins when both are
        given.
        """
        if api_key:
            auth_value = api_key
            kind = "api_key"
        elif access_token:
            auth_value = f"Bearer {access_token}"
            kind = "oauth"
        else:
            raise LinearAuthError("An API key or access token is required")

        self._client = LinearGraphQLClient(
            auth_value=auth_value,
            endpoint=self.endpoint,
            retry_policy=self.retry_policy,
        )
        logger.info("Linear session initialized (auth=%s)", kind)

    def is_authenticated(self) -> bool:
        return self._client is not None

    def verify_auth(self) -> LinearGraphQLClient:
        """Return the ready client, or fail when no session is established."""
        if self._client is None:
            raise LinearAuthError("Linear client not initialized")
        return self._client
