"""Global state management for Junos MCP."""

from junos_mcp.config import Config

# Global state (initialized on first access)
_config: Config | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config) -> None:
    """Set the global config instance.

    Allows tests to inject a custom config without modifying module internals.
    """
    global _config
    _config = config


def reset_state() -> None:
    """Reset global state for testing."""
    global _config
    _config = None
