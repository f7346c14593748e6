"""Unit tests for LinearMCPServer tool listing and routing."""

import pytest
from mcp import types

from linear_mcp.exceptions import LinearAuthError
from linear_mcp.observability import logging as log_context
from linear_mcp.server import LinearMCPServer
from linear_mcp.tools import get_tools

TOOL_NAMES = {
    "linear_create_issue",
    "linear_create_issues",
    "linear_update_issue",
    "linear_bulk_update_issues",
    "linear_search_issues",
    "linear_delete_issue",
    "linear_delete_issues",
    "linear_add_comment",
    "linear_get_comments",
}


@pytest.fixture
def server(auth, settings):
    return LinearMCPServer(auth, settings)


def test_tool_definitions():
    tools = get_tools()

    assert {tool.name for tool in tools} == TOOL_NAMES
    for tool in tools:
        assert tool.inputSchema["type"] == "object"
        assert tool.description


def test_required_fields_are_declared():
    schemas = {tool.name: tool.inputSchema for tool in get_tools()}

    assert schemas["linear_create_issue"]["required"] == ["title", "description", "teamId"]
    assert schemas["linear_delete_issues"]["required"] == ["ids"]
    assert schemas["linear_add_comment"]["required"] == ["issueId", "body"]
    assert "required" not in schemas["linear_search_issues"]


def test_bulk_update_asks_for_uuids():
    schema = {tool.name: tool.inputSchema for tool in get_tools()}["linear_bulk_update_issues"]

    assert "UUID" in schema["properties"]["issueIds"]["description"]


def test_every_tool_is_routed(server):
    assert set(server._routes) == TOOL_NAMES


@pytest.mark.asyncio
class TestCallTool:
    async def test_unknown_tool(self, server, fake_client):
        result = await server.call_tool("linear_archive_issue", {})

        assert result.is_error
        assert result.text == "Unknown tool: linear_archive_issue"

    async def test_routes_to_handler(self, server, fake_client):
        fake_client.delete_issue.return_value = {"issueDelete": {"success": True}}

        result = await server.call_tool("linear_delete_issue", {"id": "ENG-9"})

        assert not result.is_error
        assert result.text == "Successfully deleted issue ENG-9"
        fake_client.delete_issue.assert_awaited_once_with("ENG-9")

    async def test_error_result_is_returned_not_raised(self, server, auth):
        auth.verify_auth.side_effect = LinearAuthError("Linear client not initialized")

        result = await server.call_tool("linear_get_comments", {"issueId": "ENG-9"})

        assert result.is_error
        assert result.text == "Failed to get comments: Linear client not initialized"

    async def test_log_context_is_cleared(self, server, fake_client):
        fake_client.delete_issue.return_value = {"issueDelete": {"success": True}}

        await server.call_tool("linear_delete_issue", {"id": "ENG-9"})

        assert log_context._tool_name.get() is None
        assert log_context._request_id.get() is None


@pytest.mark.asyncio
class TestProtocolHandlers:
    async def test_list_tools(self, server):
        handler = server.server.request_handlers[types.ListToolsRequest]

        response = await handler(types.ListToolsRequest(method="tools/list"))

        assert {tool.name for tool in response.root.tools} == TOOL_NAMES

    async def test_call_tool_success(self, server, fake_client):
        fake_client.delete_issues.return_value = {"issueDelete": {"success": True}}
        handler = server.server.request_handlers[types.CallToolRequest]

        response = await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(
                    name="linear_delete_issues", arguments={"ids": ["ID-1", "ID-2"]}
                ),
            )
        )

        assert not response.root.isError
        assert response.root.content[0].text == "Successfully deleted 2 issues: ID-1, ID-2"

    async def test_call_tool_failure_sets_is_error(self, server, fake_client):
        fake_client.delete_issue.return_value = {"issueDelete": {"success": False}}
        handler = server.server.request_handlers[types.CallToolRequest]

        response = await handler(
            types.CallToolRequest(
                method="tools/call",
                params=types.CallToolRequestParams(
                    name="linear_delete_issue", arguments={"id": "ID-1"}
                ),
            )
        )

        assert response.root.isError
        assert response.root.content[0].text == "Failed to delete issue"
