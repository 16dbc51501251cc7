"""Device services for Junos MCP."""

from junos_mcp.services.commit import commit_config, evaluate_commit_output
from junos_mcp.services.executor import execute_command
from junos_mcp.services.facts import get_device_facts, parse_system_information
from junos_mcp.services.session import DeviceSession
from junos_mcp.services.state import get_config, reset_state, set_config

__all__ = [
    "DeviceSession",
    "commit_config",
    "evaluate_commit_output",
    "execute_command",
    "get_config",
    "get_device_facts",
    "parse_system_information",
    "reset_state",
    "set_config",
]
