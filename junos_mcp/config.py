"""Configuration management for Junos MCP."""

import logging
import os
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _get_env_float(key: str) -> float | None:
    if val := os.getenv(key):
        with suppress(ValueError):
            return float(val)
        logger.warning("Ignoring %s=%r: not a number", key, val)
    return None


@dataclass
class Config:
    """Junos MCP configuration.

    Timeouts are in seconds.
    """

    command_timeout: float = 5.0
    commit_timeout: float = 60.0
    inactivity_timeout: float = 30.0
    # Transport configuration
    transport: str = "http"  # "http" or "stdio"
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    def __post_init__(self) -> None:
        """Apply JUNOS_* environment variable overrides."""
        for name, key in (
            ("command_timeout", "JUNOS_COMMAND_TIMEOUT"),
            ("commit_timeout", "JUNOS_COMMIT_TIMEOUT"),
            ("inactivity_timeout", "JUNOS_INACTIVITY_TIMEOUT"),
        ):
            val = _get_env_float(key)
            if val is None:
                continue
            if val <= 0:
                logger.warning(
                    "%s must be > 0, got %s. Using default: %s",
                    key,
                    val,
                    getattr(self, name),
                )
                continue
            setattr(self, name, val)

        transport = os.getenv("JUNOS_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            self.transport = transport

        if http_host := os.getenv("JUNOS_HTTP_HOST"):
            self.http_host = http_host

        if http_port := os.getenv("JUNOS_HTTP_PORT"):
            with suppress(ValueError):
                self.http_port = int(http_port)

        logger.debug(
            "Config initialized: transport=%s, command_timeout=%s, "
            "commit_timeout=%s, inactivity_timeout=%s",
            self.transport,
            self.command_timeout,
            self.commit_timeout,
            self.inactivity_timeout,
        )

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file, or None to disable verification.

        Environment: JUNOS_KNOWN_HOSTS
        Default: unset, verification disabled. Inventory devices are
        usually addressed by raw IP and have no known_hosts entries.

        Raises:
            FileNotFoundError: If the configured file doesn't exist
        """
        value = os.getenv("JUNOS_KNOWN_HOSTS", "").strip()

        if not value or value.lower() == "none":
            return None

        path = Path(os.path.expanduser(value))
        if not path.exists():
            raise FileNotFoundError(
                f"JUNOS_KNOWN_HOSTS points to a missing file: {path}\n\n"
                f"To fix this:\n"
                f"1. Add device host keys: ssh-keyscan <address> >> {path}\n"
                f"2. Or disable verification: unset JUNOS_KNOWN_HOSTS"
            )
        return str(path)
