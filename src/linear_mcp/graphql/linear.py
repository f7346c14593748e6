"""Linear GraphQL operations.

All Linear API calls go through GraphQL at https://api.linear.app/graphql.
``LinearGraphQLClient`` names each operation the issue handler needs and
returns the ``data`` mapping of the response, shaped by Linear's schema.

Linear priority values: 0=No priority, 1=Urgent, 2=High, 3=Medium, 4=Low.
"""

import logging
from typing import Any, Dict, List, Optional

from .client import GraphQLClient
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

LINEAR_API = "https://api.linear.app/graphql"

# ---------------------------------------------------------------------------
# Query / mutation documents
# ---------------------------------------------------------------------------

# -- Issues ----------------------------------------------------------------

_CREATE_ISSUE_MUTATION = """
mutation CreateIssue($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue {
      id
      identifier
      title
      url
      project { id name }
      parent { id identifier title }
    }
  }
}
"""

_CREATE_ISSUES_MUTATION = """
mutation CreateIssues($input: IssueBatchCreateInput!) {
  issueBatchCreate(input: $input) {
    success
    issues {
      id
      identifier
      title
      url
      project { id name }
      parent { id identifier title }
    }
  }
}
"""

_UPDATE_ISSUE_MUTATION = """
mutation UpdateIssue($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue {
      id
      identifier
      title
      url
      state { id name }
    }
  }
}
"""

_UPDATE_ISSUES_MUTATION = """
mutation UpdateIssues($ids: [UUID!]!, $input: IssueUpdateInput!) {
  issueBatchUpdate(ids: $ids, input: $input) {
    success
  }
}
"""

_SEARCH_ISSUES_QUERY = """
query SearchIssues($filter: IssueFilter, $first: Int, $after: String, $orderBy: PaginationOrderBy) {
  issues(filter: $filter, first: $first, after: $after, orderBy: $orderBy) {
    pageInfo { hasNextPage endCursor }
    nodes {
      id
      identifier
      title
      description
      url
      priority
      createdAt
      updatedAt
      state { id name }
      assignee { id name }
      team { id key name }
      project { id name }
      parent { id identifier title }
      labels { nodes { id name } }
    }
  }
}
"""

_DELETE_ISSUE_MUTATION = """
mutation DeleteIssue($id: String!) {
  issueDelete(id: $id) {
    success
  }
}
"""

# -- Comments --------------------------------------------------------------

_ADD_COMMENT_MUTATION = """
mutation AddComment($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment {
      id
      body
      url
      createdAt
      user { id name displayName }
    }
  }
}
"""

_GET_COMMENTS_QUERY = """
query GetComments($issueId: String!, $first: Int, $after: String) {
  issue(id: $issueId) {
    comments(first: $first, after: $after) {
      nodes {
        id
        body
        url
        createdAt
        user { id name displayName }
      }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""

# -- Teams -----------------------------------------------------------------

TEAM_PAGE_SIZE = 100
STATE_PAGE_SIZE = 100

_GET_TEAMS_QUERY = """
query GetTeams($first: Int, $after: String, $statesFirst: Int) {
  teams(first: $first, after: $after) {
    nodes {
      id
      name
      key
      states(first: $statesFirst) {
        nodes { id name type }
        pageInfo { hasNextPage endCursor }
      }
    }
    pageInfo { hasNextPage endCursor }
  }
}
"""

_GET_TEAM_STATES_QUERY = """
query GetTeamStates($teamId: String!, $first: Int, $after: String) {
  team(id: $teamId) {
    states(first: $first, after: $after) {
      nodes { id name type }
      pageInfo { hasNextPage endCursor }
    }
  }
}
"""


def _build_delete_issues_mutation(count: int) -> str:
    """One aliased ``issueDelete`` per id, all in a single request."""
    params = ", ".join(f"$id{i}: String!" for i in range(count))
    fields = "\n".join(
        f"  delete{i}: issueDelete(id: $id{i}) {{ success }}" for i in range(count)
    )
    return f"mutation DeleteIssues({params}) {{\n{fields}\n}}\n"


class LinearGraphQLClient(GraphQLClient):
    """Named Linear operations over the generic GraphQL client."""

    def __init__(
        self,
        auth_value: str,
        endpoint: str = LINEAR_API,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        super().__init__(
            endpoint=endpoint,
            auth_header="Authorization",
            auth_value=auth_value,
            retry_policy=retry_policy,
        )

    # -- Issues ------------------------------------------------------------

    async def create_issue(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.execute(_CREATE_ISSUE_MUTATION, {"input": input_data})

    async def create_issues(self, issues: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self.execute(_CREATE_ISSUES_MUTATION, {"input": {"issues": issues}})

    async def update_issue(self, issue_id: str, input_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.execute(
            _UPDATE_ISSUE_MUTATION, {"id": issue_id, "input": input_data}
        )

    async def update_issues(
        self, issue_ids: List[str], input_data: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self.execute(
            _UPDATE_ISSUES_MUTATION, {"ids": issue_ids, "input": input_data}
        )

    async def search_issues(
        self,
        filter: Optional[Dict[str, Any]],
        first: int = 50,
        after: Optional[str] = None,
        order_by: str = "updatedAt",
    ) -> Dict[str, Any]:
        """Run the ``issues`` connection query with a prepared IssueFilter."""
        variables: Dict[str, Any] = {
            "filter": filter or None,
            "first": first,
            "orderBy": order_by,
        }
        if after:
            variables["after"] = after
        return await self.execute(_SEARCH_ISSUES_QUERY, variables)

    async def delete_issue(self, issue_id: str) -> Dict[str, Any]:
        return await self.execute(_DELETE_ISSUE_MUTATION, {"id": issue_id})

    async def delete_issues(self, issue_ids: List[str]) -> Dict[str, Any]:
        """Delete several issues in one request.

        Linear has no batch delete mutation, so each id gets an aliased
        ``issueDelete``. The reply is folded into the single-delete shape:
        ``{"issueDelete": {"success": <every delete succeeded>}}``.
        """
        if not issue_ids:
            raise ValueError("issue_ids must not be empty")

        mutation = _build_delete_issues_mutation(len(issue_ids))
        variables = {f"id{i}": issue_id for i, issue_id in enumerate(issue_ids)}
        data = await self.execute(mutation, variables)

        results = [data.get(f"delete{i}") or {} for i in range(len(issue_ids))]
        success = all(result.get("success") for result in results)
        if not success:
            logger.warning(
                "Batch delete partially failed: %d/%d succeeded",
                sum(1 for r in results if r.get("success")),
                len(issue_ids),
            )
        return {"issueDelete": {"success": success}}

    # -- Comments ----------------------------------------------------------

    async def add_comment(self, input_data: Dict[str, Any]) -> Dict[str, Any]:
        return await self.execute(_ADD_COMMENT_MUTATION, {"input": input_data})

    async def get_comments(
        self,
        issue_id: str,
        first: int = 50,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        variables: Dict[str, Any] = {"issueId": issue_id, "first": first}
        if after:
            variables["after"] = after
        return await self.execute(_GET_COMMENTS_QUERY, variables)

    # -- Teams -------------------------------------------------------------

    async def _collect(
        self,
        query: str,
        variables: Dict[str, Any],
        connection_path: str,
        after: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Follow a Relay connection's cursors and return every node."""
        nodes: List[Dict[str, Any]] = []
        while True:
            page_vars = dict(variables)
            if after:
                page_vars["after"] = after
            connection: Any = await self.execute(query, page_vars)
            for key in connection_path.split("."):
                connection = (connection or {}).get(key)
            connection = connection or {}

            nodes.extend(connection.get("nodes") or [])
            page_info = connection.get("pageInfo") or {}
            after = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not after:
                return nodes

    async def get_teams(self) -> Dict[str, Any]:
        """List every team with all of its workflow states.

        Both the team list and each team's ``states`` connection are paged
        to the end; ``states`` is flattened to a plain list.
        """
        teams = await self._collect(
            _GET_TEAMS_QUERY,
            {"first": TEAM_PAGE_SIZE, "statesFirst": STATE_PAGE_SIZE},
            "teams",
        )
        for team in teams:
            states = team.get("states")
            if not isinstance(states, dict):
                continue
            nodes = list(states.get("nodes") or [])
            page_info = states.get("pageInfo") or {}
            if page_info.get("hasNextPage") and page_info.get("endCursor"):
                nodes.extend(
                    await self._collect(
                        _GET_TEAM_STATES_QUERY,
                        {"teamId": team["id"], "first": STATE_PAGE_SIZE},
                        "team.states",
                        after=page_info["endCursor"],
                    )
                )
            team["states"] = nodes
        return {"teams": {"nodes": teams}}
