"""MCP tools for device command, fact and commit operations.

Each tool takes the device endpoint on every call; nothing about a device
is remembered between calls. Results are plain dicts with ``status``,
``message`` and ``data`` keys (facts add the five fact fields).
"""

import logging
from typing import Any

from junos_mcp.errors import DeviceError, ReplyParseError
from junos_mcp.models import DeviceEndpoint, Outcome
from junos_mcp.services import commit, executor, facts
from junos_mcp.services.state import get_config

logger = logging.getLogger(__name__)

PARSE_ERROR_STATUS = "parse_error"
PARSE_ERROR_MESSAGE = "Unable to parse device facts"


async def execute_command(
    address: str,
    username: str,
    password: str,
    command: str,
    port: int = 22,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Run a read-only Junos CLI command on a device over SSH.

    Args:
        address: Device IP address or hostname.
        username: SSH username.
        password: SSH password.
        command: CLI command, e.g. "show interfaces terse".
            Pagination is disabled automatically.
        port: SSH port (default: 22).
        timeout: Connect/login timeout in seconds (default from config).

    Returns:
        Dict with status, message, and data (raw command output on success,
        error detail otherwise).
    """
    config = get_config()
    endpoint = DeviceEndpoint(address, username, password, port)
    result = await executor.execute_command(
        endpoint,
        command,
        timeout or config.command_timeout,
        known_hosts=config.known_hosts_path,
    )
    return result.to_dict()


async def get_device_facts(
    address: str,
    username: str,
    password: str,
    port: int = 22,
    timeout: float | None = None,
) -> dict[str, Any]:
    """Retrieve hardware model, OS name/version, serial number and host name.

    Args:
        address: Device IP address or hostname.
        username: SSH username.
        password: SSH password.
        port: SSH port (default: 22).
        timeout: Connect/login timeout in seconds (default from config).

    Returns:
        Dict with status "success" and hardwareModel, osName, osVersion,
        serialNumber, hostName; or status, message and data on failure.
    """
    config = get_config()
    endpoint = DeviceEndpoint(address, username, password, port)

    try:
        device_facts = await facts.get_device_facts(
            endpoint,
            timeout or config.command_timeout,
            known_hosts=config.known_hosts_path,
        )
    except DeviceError as e:
        return e.result.to_dict()
    except ReplyParseError as e:
        return {
            "status": PARSE_ERROR_STATUS,
            "message": PARSE_ERROR_MESSAGE,
            "data": str(e),
        }

    return {"status": Outcome.SUCCESS.value, **device_facts.to_dict()}


async def commit_config(
    address: str,
    username: str,
    password: str,
    config: str,
    port: int = 22,
    command_timeout: float | None = None,
    inactivity_timeout: float | None = None,
) -> dict[str, Any]:
    """Apply and commit Junos configuration in an exclusive private session.

    Args:
        address: Device IP address or hostname.
        username: SSH username.
        password: SSH password.
        config: Configuration lines in set format, e.g.
            "set interfaces ge-0/0/0 disable".
        port: SSH port (default: 22).
        command_timeout: Connect/login timeout in seconds (default from config).
        inactivity_timeout: Seconds without device output before the shell
            is closed (default from config).

    Returns:
        Dict with status (success, commit_failed, no_rpc_reply,
        inactivity_timeout, authentication failed, timeout, unreachable),
        message, and data (the rpc-reply on success, the commit error
        message or diagnostic text otherwise).
    """
    settings = get_config()
    endpoint = DeviceEndpoint(address, username, password, port)
    result = await commit.commit_config(
        endpoint,
        config,
        command_timeout or settings.commit_timeout,
        inactivity_timeout or settings.inactivity_timeout,
        known_hosts=settings.known_hosts_path,
    )
    return result.to_dict()
