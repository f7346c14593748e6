"""Test configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest

# Set test environment variables BEFORE importing the package
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("LINEAR_API_KEY", None)
os.environ.pop("LINEAR_ACCESS_TOKEN", None)

from linear_mcp.auth import LinearAuth
from linear_mcp.config import Settings, get_settings
from linear_mcp.graphql.linear import LinearGraphQLClient
from linear_mcp.handlers.issues import IssueHandler


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with deterministic formatting and no credentials."""
    return Settings(display_timezone="UTC", environment="test")


@pytest.fixture
def fake_client():
    """Stand-in for LinearGraphQLClient; every operation is an AsyncMock."""
    return MagicMock(spec=LinearGraphQLClient)


@pytest.fixture
def auth(fake_client):
    """Authenticated session whose verify_auth() hands out fake_client."""
    auth = MagicMock(spec=LinearAuth)
    auth.verify_auth.return_value = fake_client
    return auth


@pytest.fixture
def handler(auth, settings) -> IssueHandler:
    return IssueHandler(auth, settings)


@pytest.fixture
def teams_response():
    """get_teams() payload with two teams that both have a 'Done' state."""
    return {
        "teams": {
            "nodes": [
                {
                    "id": "team-a",
                    "key": "A",
                    "name": "Alpha",
                    "states": [
                        {"id": "s1", "name": "Done"},
                        {"id": "s2", "name": "In Progress"},
                    ],
                },
                {
                    "id": "team-b",
                    "key": "B",
                    "name": "Beta",
                    "states": [
                        {"id": "s3", "name": "Done"},
                        {"id": "s4", "name": "Review"},
                    ],
                },
            ]
        }
    }
