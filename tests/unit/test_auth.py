"""Tests for the Linear session provider."""

import logging

import pytest

from linear_mcp.auth import LinearAuth
from linear_mcp.config import Settings
from linear_mcp.exceptions import LinearAuthError
from linear_mcp.graphql.linear import LinearGraphQLClient
from linear_mcp.graphql.retry import RetryPolicy


class TestInitialize:
    def test_api_key_is_sent_verbatim(self):
        auth = LinearAuth()
        auth.initialize(api_key="lin_api_abc")

        client = auth.verify_auth()
        assert isinstance(client, LinearGraphQLClient)
        assert client.auth_value == "lin_api_abc"

    def test_access_token_uses_bearer(self):
        auth = LinearAuth()
        auth.initialize(access_token="oauth-tok")

        assert auth.verify_auth().auth_value == "Bearer oauth-tok"

    def test_api_key_wins_over_token(self):
        auth = LinearAuth()
        auth.initialize(api_key="lin_api_abc", access_token="oauth-tok")

        assert auth.verify_auth().auth_value == "lin_api_abc"

    def test_requires_a_credential(self):
        auth = LinearAuth()

        with pytest.raises(LinearAuthError):
            auth.initialize()
        assert not auth.is_authenticated()

    def test_endpoint_and_retries_are_passed_through(self):
        policy = RetryPolicy(max_retries=0)
        auth = LinearAuth(endpoint="http://localhost:4000/graphql", retry_policy=policy)
        auth.initialize(api_key="k")

        client = auth.verify_auth()
        assert client.endpoint == "http://localhost:4000/graphql"
        assert client.retry_policy is policy


class TestVerifyAuth:
    def test_uninitialized_session_fails(self):
        with pytest.raises(LinearAuthError, match="Linear client not initialized"):
            LinearAuth().verify_auth()

    def test_is_authenticated(self):
        auth = LinearAuth()
        assert auth.is_authenticated() is False

        auth.initialize(api_key="k")
        assert auth.is_authenticated() is True


class TestFromSettings:
    def test_with_api_key(self):
        auth = LinearAuth.from_settings(Settings(linear_api_key="lin_api_abc"))

        assert auth.is_authenticated()
        assert auth.verify_auth().endpoint == "https://api.linear.app/graphql"

    def test_retry_policy_comes_from_settings(self):
        settings = Settings(linear_api_key="k", http_max_retries=1, http_retry_max_delay=2.0)

        policy = LinearAuth.from_settings(settings).verify_auth().retry_policy

        assert policy.max_retries == 1
        assert policy.max_delay == 2.0

    def test_with_access_token(self):
        auth = LinearAuth.from_settings(Settings(linear_access_token="tok"))

        assert auth.verify_auth().auth_value == "Bearer tok"

    def test_without_credentials_stays_unauthenticated(self, settings, caplog):
        with caplog.at_level(logging.WARNING, logger="linear_mcp.auth"):
            auth = LinearAuth.from_settings(settings)

        assert not auth.is_authenticated()
        assert "No LINEAR_API_KEY or LINEAR_ACCESS_TOKEN configured" in caplog.text
