"""GraphQL transport for the Linear API."""

from .client import GraphQLClient
from .linear import LINEAR_API, LinearGraphQLClient

__all__ = ["GraphQLClient", "LINEAR_API", "LinearGraphQLClient"]
