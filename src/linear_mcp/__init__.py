"""Linear MCP: issue tools for the Model Context Protocol backed by Linear's GraphQL API."""

__version__ = "0.1.0"
