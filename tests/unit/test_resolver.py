"""Tests for workflow-state name resolution."""

from unittest.mock import MagicMock

import pytest

from linear_mcp.exceptions import UnresolvedReferenceError
from linear_mcp.graphql.linear import LinearGraphQLClient
from linear_mcp.handlers.resolver import (
    find_state_id,
    is_opaque_id,
    resolve_state_id,
    resolve_update_state,
)

STATE_UUID = "5e2b1c3a-9f4d-4e8a-b7c6-0123456789ab"


@pytest.fixture
def client(teams_response):
    client = MagicMock(spec=LinearGraphQLClient)
    client.get_teams.return_value = teams_response
    return client


class TestIsOpaqueId:
    def test_lowercase_uuid(self):
        assert is_opaque_id(STATE_UUID)

    def test_uppercase_uuid(self):
        assert is_opaque_id(STATE_UUID.upper())

    @pytest.mark.parametrize("value", ["Done", "ENG-12", "5e2b1c3a9f4d4e8ab7c60123456789ab", ""])
    def test_non_ids(self, value):
        assert not is_opaque_id(value)


class TestFindStateId:
    def test_first_match_across_teams_wins(self, teams_response):
        teams = teams_response["teams"]["nodes"]
        assert find_state_id(teams, "done") == "s1"

    def test_match_in_later_team(self, teams_response):
        teams = teams_response["teams"]["nodes"]
        assert find_state_id(teams, "REVIEW") == "s4"

    def test_accepts_connection_shape(self):
        teams = [{"key": "A", "states": {"nodes": [{"id": "s9", "name": "Todo"}]}}]
        assert find_state_id(teams, "todo") == "s9"

    def test_no_match(self, teams_response):
        assert find_state_id(teams_response["teams"]["nodes"], "Unknown") is None


@pytest.mark.asyncio
class TestResolveStateId:
    async def test_name_is_resolved(self, client):
        assert await resolve_state_id(client, "dOnE") == "s1"
        client.get_teams.assert_awaited_once()

    async def test_uuid_skips_lookup(self, client):
        assert await resolve_state_id(client, STATE_UUID) == STATE_UUID
        client.get_teams.assert_not_awaited()

    async def test_non_string_passes_through(self, client):
        assert await resolve_state_id(client, 7) == 7
        client.get_teams.assert_not_awaited()

    async def test_unknown_name_raises(self, client):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            await resolve_state_id(client, "Unknown")

        assert exc_info.value.reference == "Unknown"
        assert "Could not find state with name: Unknown" in str(exc_info.value)


@pytest.mark.asyncio
class TestResolveUpdateState:
    async def test_returns_copy_with_resolved_id(self, client):
        update = {"stateId": "In Progress", "title": "New"}

        resolved = await resolve_update_state(client, update)

        assert resolved == {"stateId": "s2", "title": "New"}
        assert update["stateId"] == "In Progress"

    async def test_without_state_no_lookup(self, client):
        resolved = await resolve_update_state(client, {"priority": 2})

        assert resolved == {"priority": 2}
        client.get_teams.assert_not_awaited()
