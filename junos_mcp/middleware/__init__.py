"""Junos MCP middleware components."""

from junos_mcp.middleware.base import JunosMiddleware
from junos_mcp.middleware.errors import ErrorHandlingMiddleware
from junos_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "JunosMiddleware",
    "LoggingMiddleware",
]
