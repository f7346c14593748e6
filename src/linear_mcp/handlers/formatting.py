"""Render Linear responses as tool text, and reject failed payloads.

Linear mutations answer with ``{"success": bool, <payload>: ...}``.
``ensure_success`` turns ``success=false`` (or a missing payload) into an
OperationFailedError; the ``format_*`` functions render the rest.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from ..exceptions import OperationFailedError


def ensure_success(
    payload: Optional[Mapping[str, Any]],
    message: str,
    require: Optional[str] = None,
) -> Dict[str, Any]:
    """Return ``payload`` if Linear reported success, else raise.

    Args:
        payload: The mutation payload, e.g. ``data["issueCreate"]``.
        message: Error message, e.g. ``"Failed to create issue"``.
        require: Key that must be present and non-empty on success.

    Raises:
        OperationFailedError: The payload is missing, unsuccessful, or lacks ``require``.
    """
    if not isinstance(payload, Mapping) or not payload.get("success"):
        raise OperationFailedError(message)
    if require and not payload.get(require):
        raise OperationFailedError(message)
    return dict(payload)


def format_timestamp(value: Optional[str], tz_name: str = "UTC") -> str:
    """Render an ISO-8601 timestamp as ``M/D/YYYY, h:MM:SS AM``.

    Naive timestamps are taken as UTC. Unparseable input is returned as-is.
    """
    if not value:
        return "Unknown"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    local = parsed.astimezone(ZoneInfo(tz_name))

    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _author(comment: Mapping[str, Any]) -> str:
    user = comment.get("user") or {}
    return user.get("displayName") or user.get("name") or "Unknown"


# -- Issues ------------------------------------------------------------------


def format_created_issue(issue: Mapping[str, Any]) -> str:
    project = issue.get("project")
    lines = [
        "Successfully created issue",
        f"Issue: {issue.get('identifier')}",
        f"Title: {issue.get('title')}",
        f"URL: {issue.get('url')}",
        f"Project: {project['name'] if project else 'None'}",
    ]
    parent = issue.get("parent")
    if parent:
        lines.append(f"Parent: {parent.get('identifier')}")
    return "\n".join(lines)


def format_created_issues(issues: Sequence[Mapping[str, Any]]) -> str:
    bullets = []
    for issue in issues:
        bullet = f"- {issue.get('identifier')}: {issue.get('title')}\n  URL: {issue.get('url')}"
        parent = issue.get("parent")
        if parent:
            bullet += f"\n  Parent: {parent.get('identifier')}"
        bullets.append(bullet)
    return f"Successfully created {len(issues)} issues:\n" + "\n".join(bullets)


def format_updated_issue(issue: Mapping[str, Any]) -> str:
    state = issue.get("state") or {}
    return (
        f"Successfully updated issue {issue.get('identifier')}\n"
        f"Title: {issue.get('title')}\n"
        f"URL: {issue.get('url')}\n"
        f"State: {state.get('name') or 'Unknown'}"
    )


def format_bulk_update(count: int) -> str:
    # issueBatchUpdate is queried for success only, so there is nothing per-issue to show
    return f"Successfully updated {count} issues"


def format_deleted_issue(issue_id: str) -> str:
    return f"Successfully deleted issue {issue_id}"


def format_deleted_issues(issue_ids: Sequence[str]) -> str:
    return f"Successfully deleted {len(issue_ids)} issues: {', '.join(issue_ids)}"


# -- Comments ----------------------------------------------------------------


def format_comment_created(comment: Mapping[str, Any], tz_name: str = "UTC") -> str:
    return (
        "Successfully added comment to issue\n"
        f"Comment ID: {comment.get('id')}\n"
        f"URL: {comment.get('url')}\n"
        f"By: {_author(comment)}\n"
        f"Created at: {format_timestamp(comment.get('createdAt'), tz_name)}"
    )


def format_comments(
    comments: List[Mapping[str, Any]],
    page_info: Optional[Mapping[str, Any]] = None,
    tz_name: str = "UTC",
) -> str:
    """Numbered comment list, with a cursor hint when more pages exist."""
    text = f"Found {len(comments)} comments:\n\n"

    for index, comment in enumerate(comments, start=1):
        text += (
            f"{index}. Comment by {_author(comment)} "
            f"({format_timestamp(comment.get('createdAt'), tz_name)}):\n"
        )
        text += f"{comment.get('body')}\n"
        text += f"URL: {comment.get('url')}\n\n"

    if page_info and page_info.get("hasNextPage"):
        text += "\nThere are more comments available."
        cursor = page_info.get("endCursor")
        if cursor:
            text += f" Use 'after: \"{cursor}\"' to fetch the next page."

    return text
