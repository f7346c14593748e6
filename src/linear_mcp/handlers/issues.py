"""Issue tool handler.

Every ``handle_*`` method follows the same sequence: obtain the
authenticated client, check required arguments, resolve references and
build variables, make one Linear call, then render the answer. Any failure
is caught once per call and returned as an error ToolResult tagged with the
operation name. No call returns a partial result.
"""

import logging
from typing import Any, Dict, Mapping

from .base import BaseHandler, ToolResult
from .filters import DEFAULT_PAGE_SIZE, build_search_params
from .formatting import (
    ensure_success,
    format_bulk_update,
    format_comment_created,
    format_comments,
    format_created_issue,
    format_created_issues,
    format_deleted_issue,
    format_deleted_issues,
    format_updated_issue,
)
from .resolver import resolve_update_state
from .validation import require_list, require_object
from ..exceptions import OperationFailedError, ValidationError

logger = logging.getLogger(__name__)

ISSUE_CREATE_REQUIRED = ("title", "description", "teamId")

_CREATE_FIELDS = (
    "title",
    "description",
    "teamId",
    "assigneeId",
    "priority",
    "projectId",
    "parentId",
)
_UPDATE_FIELDS = (
    "title",
    "description",
    "assigneeId",
    "priority",
    "projectId",
    "stateId",
)
_COMMENT_FIELDS = ("issueId", "body", "parentId", "createAsUser", "displayIconUrl")


def _pick(args: Mapping[str, Any], fields) -> Dict[str, Any]:
    """Copy the listed fields that are present and not None."""
    return {key: args[key] for key in fields if args.get(key) is not None}


class IssueHandler(BaseHandler):
    """Create, update, search, and delete issues; add and list comments."""

    async def handle_create_issue(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ISSUE_CREATE_REQUIRED)

            data = await client.create_issue(_pick(args, _CREATE_FIELDS))
            payload = ensure_success(
                data.get("issueCreate"), "Failed to create issue", require="issue"
            )

            return self.create_response(format_created_issue(payload["issue"]))
        except Exception as e:
            return self.handle_error(e, "create issue")

    async def handle_create_issues(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["issues"])
            issues = require_list(args, "issues")
            for index, issue in enumerate(issues):
                if not isinstance(issue, dict):
                    raise ValidationError(
                        f"issues[{index}] must be an object", field=f"issues[{index}]"
                    )
                self.validate_required_params(
                    issue, ISSUE_CREATE_REQUIRED, prefix=f"issues[{index}]."
                )

            data = await client.create_issues([_pick(issue, _CREATE_FIELDS) for issue in issues])
            payload = ensure_success(
                data.get("issueBatchCreate"), "Failed to create issues", require="issues"
            )

            return self.create_response(format_created_issues(payload["issues"]))
        except Exception as e:
            return self.handle_error(e, "create issues")

    async def handle_update_issue(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["id", "update"])
            update = require_object(args, "update")

            update = await resolve_update_state(client, _pick(update, _UPDATE_FIELDS))

            data = await client.update_issue(args["id"], update)
            payload = ensure_success(
                data.get("issueUpdate"), "Failed to update issue", require="issue"
            )

            return self.create_response(format_updated_issue(payload["issue"]))
        except Exception as e:
            return self.handle_error(e, "update issue")

    async def handle_bulk_update_issues(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["issueIds", "update"])
            issue_ids = require_list(args, "issueIds")
            update = require_object(args, "update")

            update = await resolve_update_state(client, _pick(update, _UPDATE_FIELDS))

            data = await client.update_issues(issue_ids, update)
            ensure_success(data.get("issueBatchUpdate"), "Failed to update issues")

            return self.create_response(format_bulk_update(len(issue_ids)))
        except Exception as e:
            return self.handle_error(e, "update issues")

    async def handle_search_issues(self, args: Dict[str, Any]) -> ToolResult:
        """Search issues; returns Linear's ``issues`` connection as JSON."""
        try:
            client = self.verify_auth()
            filter_, first, after, order_by = build_search_params(args)
            logger.debug("Searching issues with filter %s", filter_)

            result = await client.search_issues(filter_, first, after, order_by)

            return self.create_json_response(result)
        except Exception as e:
            return self.handle_error(e, "search issues")

    async def handle_delete_issue(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["id"])

            data = await client.delete_issue(args["id"])
            ensure_success(data.get("issueDelete"), "Failed to delete issue")

            return self.create_response(format_deleted_issue(args["id"]))
        except Exception as e:
            return self.handle_error(e, "delete issue")

    async def handle_delete_issues(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["ids"])
            ids = require_list(args, "ids")

            data = await client.delete_issues(ids)
            ensure_success(data.get("issueDelete"), "Failed to delete issues")

            return self.create_response(format_deleted_issues(ids))
        except Exception as e:
            return self.handle_error(e, "delete issues")

    async def handle_add_comment(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["issueId", "body"])

            data = await client.add_comment(_pick(args, _COMMENT_FIELDS))
            payload = ensure_success(
                data.get("commentCreate"), "Failed to add comment", require="comment"
            )

            return self.create_response(
                format_comment_created(payload["comment"], self.settings.display_timezone)
            )
        except Exception as e:
            return self.handle_error(e, "add comment")

    async def handle_get_comments(self, args: Dict[str, Any]) -> ToolResult:
        try:
            client = self.verify_auth()
            self.validate_required_params(args, ["issueId"])

            data = await client.get_comments(
                args["issueId"],
                args.get("first") or DEFAULT_PAGE_SIZE,
                args.get("after") or None,
            )
            issue = data.get("issue") or {}
            connection = issue.get("comments")
            if not connection:
                raise OperationFailedError("Failed to get comments or issue not found")

            return self.create_response(
                format_comments(
                    connection.get("nodes") or [],
                    connection.get("pageInfo"),
                    self.settings.display_timezone,
                )
            )
        except Exception as e:
            return self.handle_error(e, "get comments")
