"""Junos MCP FastMCP server.

This is a thin wrapper that wires the device tools into an MCP server.
All device logic lives in the services/ package.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from junos_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from junos_mcp.services import get_config
from junos_mcp.tools import commit_config, execute_command, get_device_facts
from junos_mcp.utils.console import MCPRequestFormatter


def _configure_logging() -> None:
    """Configure colorful logging for the junos_mcp package.

    Called at module load time so logging is set up before any logger is
    used, regardless of how the server is started.
    """
    log_level = os.getenv("JUNOS_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("JUNOS_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    junos_logger = logging.getLogger("junos_mcp")
    junos_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not junos_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(MCPRequestFormatter(use_colors=use_colors))
        junos_logger.addHandler(handler)
        junos_logger.propagate = False

    for noisy_logger in [
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
        "asyncssh",
        "httpx",
        "httpcore",
        "fastmcp",
        "starlette",
        "anyio",
    ]:
        lg = logging.getLogger(noisy_logger)
        lg.setLevel(logging.WARNING)
        lg.handlers = []
        lg.propagate = False


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Log startup settings and shutdown.

    No SSH state outlives a tool call, so there is nothing to clean up.
    """
    config = get_config()
    logger.info(
        "Junos MCP server starting (command_timeout=%ss, commit_timeout=%ss, "
        "inactivity_timeout=%ss)",
        config.command_timeout,
        config.commit_timeout,
        config.inactivity_timeout,
    )
    if config.known_hosts_path is None:
        logger.warning(
            "SSH host key verification disabled. "
            "Set JUNOS_KNOWN_HOSTS to a known_hosts file to enable it."
        )
    logger.info("Junos MCP server ready to accept connections")

    try:
        yield {}
    finally:
        logger.info("Junos MCP server shutdown complete")


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Environment variables:
        JUNOS_LOG_PAYLOADS: Set to "true" to log tool results
        JUNOS_SLOW_THRESHOLD_MS: Threshold for slow call warnings (default: 10000)
        JUNOS_INCLUDE_TRACEBACK: Set to "true" to include tracebacks in error logs
    """
    log_payloads = os.getenv("JUNOS_LOG_PAYLOADS", "").lower() == "true"
    slow_threshold = float(os.getenv("JUNOS_SLOW_THRESHOLD_MS", "10000"))
    include_traceback = os.getenv("JUNOS_INCLUDE_TRACEBACK", "").lower() == "true"

    # First added = innermost
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=include_traceback))
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=log_payloads,
            slow_threshold_ms=slow_threshold,
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware and tools."""
    server = FastMCP(
        "junos_mcp",
        lifespan=app_lifespan,
    )

    configure_middleware(server)

    server.tool()(execute_command)
    server.tool()(get_device_facts)
    server.tool()(commit_config)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
