"""MCP tools for Junos MCP."""

from junos_mcp.tools.device import commit_config, execute_command, get_device_facts

__all__ = ["commit_config", "execute_command", "get_device_facts"]
