"""Junos MCP: SSH command, fact and commit engine for Junos devices."""

__version__ = "0.1.0"
