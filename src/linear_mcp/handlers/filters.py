"""Translate search tool arguments into Linear's IssueFilter grammar."""

import re
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_PAGE_SIZE = 50
DEFAULT_ORDER_BY = "updatedAt"

# Human-readable issue identifier, e.g. ENG-123
IDENTIFIER_PATTERN = re.compile(r"^[A-Z]+-[0-9]+$")


def parse_identifier(query: str) -> Optional[Tuple[str, int]]:
    """Split ``"ENG-123"`` into ``("ENG", 123)``; None for anything else."""
    if not IDENTIFIER_PATTERN.fullmatch(query):
        return None
    team_key, _, number = query.rpartition("-")
    return team_key, int(number)


def _project_id(args: Mapping[str, Any]) -> Optional[str]:
    nested = args.get("filter")
    if not isinstance(nested, dict):
        return None
    project = nested.get("project")
    if not isinstance(project, dict):
        return None
    project_id = project.get("id")
    if not isinstance(project_id, dict):
        return None
    return project_id.get("eq")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def build_search_filter(args: Mapping[str, Any]) -> Dict[str, Any]:
    """Build an IssueFilter from search arguments.

    An identifier-shaped query becomes ``team.key`` + ``number`` terms and
    suppresses full-text search; any other non-empty query becomes a
    ``search`` term. Direct filters are then added, each only when supplied.
    All terms are ANDed by Linear.
    """
    filter_: Dict[str, Any] = {}

    query = args.get("query")
    query = query.strip() if isinstance(query, str) else ""

    identifier = parse_identifier(query) if query else None
    if identifier:
        team_key, number = identifier
        filter_["team"] = {"key": {"eq": team_key}}
        filter_["number"] = {"eq": number}
    elif query:
        filter_["search"] = query

    project_id = _project_id(args)
    if project_id:
        filter_["project"] = {"id": {"eq": project_id}}

    if args.get("teamIds") is not None:
        filter_.setdefault("team", {})["id"] = {"in": list(args["teamIds"])}

    if args.get("assigneeIds") is not None:
        filter_["assignee"] = {"id": {"in": list(args["assigneeIds"])}}

    if args.get("states") is not None:
        filter_["state"] = {"name": {"in": list(args["states"])}}

    if _is_number(args.get("priority")):
        filter_["priority"] = {"eq": args["priority"]}

    return filter_


def build_search_params(
    args: Mapping[str, Any],
) -> Tuple[Dict[str, Any], int, Optional[str], str]:
    """Return ``(filter, first, after, order_by)`` for ``search_issues``."""
    return (
        build_search_filter(args),
        args.get("first") or DEFAULT_PAGE_SIZE,
        args.get("after") or None,
        args.get("orderBy") or DEFAULT_ORDER_BY,
    )
