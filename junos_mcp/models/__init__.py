"""Data models for Junos MCP."""

from junos_mcp.models.device import DeviceEndpoint, DeviceFacts
from junos_mcp.models.result import CommandResult, CommitResult, Messages, Outcome

__all__ = [
    "CommandResult",
    "CommitResult",
    "DeviceEndpoint",
    "DeviceFacts",
    "Messages",
    "Outcome",
]
