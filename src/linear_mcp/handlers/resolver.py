"""Workflow-state reference resolution.

Callers may pass ``stateId`` as either a Linear UUID or a state display name
such as ``"In Progress"``. Names are looked up against every team's workflow
states; the first case-insensitive match in listing order wins, across all
teams. A name shared by several teams therefore resolves to the state of
whichever team Linear lists first.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..exceptions import UnresolvedReferenceError

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_opaque_id(value: str) -> bool:
    return bool(UUID_PATTERN.fullmatch(value))


def _team_states(team: Mapping[str, Any]) -> List[Dict[str, Any]]:
    # get_teams() flattens the connection, but accept the raw shape too
    states = team.get("states") or []
    if isinstance(states, dict):
        states = states.get("nodes") or []
    return states


def find_state_id(teams: Iterable[Mapping[str, Any]], name: str) -> Optional[str]:
    """Return the id of the first state named ``name`` (case-insensitive)."""
    wanted = name.casefold()
    for team in teams:
        for state in _team_states(team):
            if str(state.get("name") or "").casefold() == wanted:
                return state.get("id")
    return None


async def resolve_state_id(client, value: Any) -> Any:
    """Turn a state reference into a state id.

    Non-strings and UUID-shaped strings are returned unchanged without
    contacting Linear. Anything else is treated as a state name and costs one
    ``get_teams()`` call.

    Raises:
        UnresolvedReferenceError: No team has a state with that name.
    """
    if not isinstance(value, str) or is_opaque_id(value):
        return value

    response = await client.get_teams()
    teams = ((response or {}).get("teams") or {}).get("nodes") or []

    state_id = find_state_id(teams, value)
    if state_id is None:
        raise UnresolvedReferenceError(
            f"Could not find state with name: {value}", reference=value
        )

    logger.debug("Resolved state name %r to %s", value, state_id)
    return state_id


async def resolve_update_state(client, update: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of ``update`` whose ``stateId``, if any, is a canonical id."""
    resolved = dict(update)
    if resolved.get("stateId"):
        resolved["stateId"] = await resolve_state_id(client, resolved["stateId"])
    return resolved
