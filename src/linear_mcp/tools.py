"""MCP tool definitions for the Linear issue tools."""

from typing import List

from mcp import types

_ISSUE_CREATE_PROPERTIES = {
    "title": {
        "type": "string",
        "description": "Issue title",
    },
    "description": {
        "type": "string",
        "description": "Issue description (Markdown)",
    },
    "teamId": {
        "type": "string",
        "description": "Team ID",
    },
    "assigneeId": {
        "type": "string",
        "description": "Assignee user ID",
    },
    "priority": {
        "type": "integer",
        "minimum": 0,
        "maximum": 4,
        "description": "Priority: 0=None, 1=Urgent, 2=High, 3=Medium, 4=Low",
    },
    "projectId": {
        "type": "string",
        "description": "Project ID",
    },
    "parentId": {
        "type": "string",
        "description": "Parent issue ID, to create a sub-issue",
    },
}

_ISSUE_UPDATE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "New title",
        },
        "description": {
            "type": "string",
            "description": "New description (Markdown)",
        },
        "assigneeId": {
            "type": "string",
            "description": "New assignee user ID",
        },
        "priority": {
            "type": "integer",
            "minimum": 0,
            "maximum": 4,
            "description": "Priority: 0=None, 1=Urgent, 2=High, 3=Medium, 4=Low",
        },
        "projectId": {
            "type": "string",
            "description": "New project ID",
        },
        "stateId": {
            "type": "string",
            "description": "Workflow state ID, or a state name such as 'In Progress'",
        },
    },
}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}


def get_tools() -> List[types.Tool]:
    """Return the issue tools in a stable order."""
    return [
        # 1. create_issue
        types.Tool(
            name="linear_create_issue",
            description="Create a new Linear issue",
            inputSchema={
                "type": "object",
                "properties": _ISSUE_CREATE_PROPERTIES,
                "required": ["title", "description", "teamId"],
            },
        ),
        # 2. create_issues
        types.Tool(
            name="linear_create_issues",
            description="Create several Linear issues in one batch",
            inputSchema={
                "type": "object",
                "properties": {
                    "issues": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "properties": _ISSUE_CREATE_PROPERTIES,
                            "required": ["title", "description", "teamId"],
                        },
                        "description": "Issues to create",
                    },
                },
                "required": ["issues"],
            },
        ),
        # 3. update_issue
        types.Tool(
            name="linear_update_issue",
            description="Update an existing Linear issue",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Issue ID to update",
                    },
                    "update": _ISSUE_UPDATE_SCHEMA,
                },
                "required": ["id", "update"],
            },
        ),
        # 4. bulk_update_issues
        types.Tool(
            name="linear_bulk_update_issues",
            description="Apply the same update to several Linear issues, addressed by UUID",
            inputSchema={
                "type": "object",
                "properties": {
                    "issueIds": {
                        **_STRING_LIST,
                        "minItems": 1,
                        "description": (
                            "Issue UUIDs to update. Identifiers such as ENG-12 are "
                            "not accepted here, unlike linear_update_issue"
                        ),
                    },
                    "update": _ISSUE_UPDATE_SCHEMA,
                },
                "required": ["issueIds", "update"],
            },
        ),
        # 5. search_issues
        types.Tool(
            name="linear_search_issues",
            description=(
                "Search Linear issues by text or identifier (e.g. ENG-123), "
                "with optional filters and cursor pagination"
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Search text, or an issue identifier such as ENG-123",
                    },
                    "filter": {
                        "type": "object",
                        "description": "Direct filter, e.g. {\"project\": {\"id\": {\"eq\": \"<id>\"}}}",
                    },
                    "teamIds": {**_STRING_LIST, "description": "Restrict to these team IDs"},
                    "assigneeIds": {**_STRING_LIST, "description": "Restrict to these assignee IDs"},
                    "states": {**_STRING_LIST, "description": "Restrict to these state names"},
                    "priority": {
                        "type": "integer",
                        "minimum": 0,
                        "maximum": 4,
                        "description": "Exact priority",
                    },
                    "first": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 250,
                        "default": 50,
                        "description": "Page size",
                    },
                    "after": {
                        "type": "string",
                        "description": "Cursor from a previous page's pageInfo.endCursor",
                    },
                    "orderBy": {
                        "type": "string",
                        "enum": ["createdAt", "updatedAt"],
                        "default": "updatedAt",
                        "description": "Sort key",
                    },
                },
            },
        ),
        # 6. delete_issue
        types.Tool(
            name="linear_delete_issue",
            description="Delete a Linear issue",
            inputSchema={
                "type": "object",
                "properties": {
                    "id": {
                        "type": "string",
                        "description": "Issue ID to delete",
                    },
                },
                "required": ["id"],
            },
        ),
        # 7. delete_issues
        types.Tool(
            name="linear_delete_issues",
            description="Delete several Linear issues",
            inputSchema={
                "type": "object",
                "properties": {
                    "ids": {**_STRING_LIST, "minItems": 1, "description": "Issue IDs to delete"},
                },
                "required": ["ids"],
            },
        ),
        # 8. add_comment
        types.Tool(
            name="linear_add_comment",
            description="Add a comment to a Linear issue",
            inputSchema={
                "type": "object",
                "properties": {
                    "issueId": {
                        "type": "string",
                        "description": "Issue ID to comment on",
                    },
                    "body": {
                        "type": "string",
                        "description": "Comment body (Markdown)",
                    },
                    "parentId": {
                        "type": "string",
                        "description": "Parent comment ID, to reply in a thread",
                    },
                    "createAsUser": {
                        "type": "string",
                        "description": "Display name to attribute the comment to (OAuth app actors only)",
                    },
                    "displayIconUrl": {
                        "type": "string",
                        "description": "Avatar URL for createAsUser",
                    },
                },
                "required": ["issueId", "body"],
            },
        ),
        # 9. get_comments
        types.Tool(
            name="linear_get_comments",
            description="List comments on a Linear issue",
            inputSchema={
                "type": "object",
                "properties": {
                    "issueId": {
                        "type": "string",
                        "description": "Issue ID",
                    },
                    "first": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": 250,
                        "default": 50,
                        "description": "Page size",
                    },
                    "after": {
                        "type": "string",
                        "description": "Cursor from a previous page",
                    },
                },
                "required": ["issueId"],
            },
        ),
    ]
