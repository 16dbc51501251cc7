"""Utility functions for Junos MCP."""

from junos_mcp.utils.console import ColorfulFormatter, MCPRequestFormatter
from junos_mcp.utils.reply import find_reply, node_text, parse_reply

__all__ = [
    "ColorfulFormatter",
    "MCPRequestFormatter",
    "find_reply",
    "node_text",
    "parse_reply",
]
