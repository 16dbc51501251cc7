"""Per-call SSH session to a single device.

Sessions are never pooled or reused: each operation opens its own
connection and closes it on the way out, whatever happens in between.
"""

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TypeVar

import asyncssh

from junos_mcp.errors import classify_error
from junos_mcp.models import DeviceEndpoint

logger = logging.getLogger(__name__)

TERM_TYPE = "vt100"

_Session = TypeVar("_Session", bound=asyncssh.SSHClientSession)


def _decode(stream: str | bytes | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


class DeviceSession:
    """Scoped SSH connection to one device.

    Example:
        async with DeviceSession(endpoint, connect_timeout=5.0) as session:
            stdout, stderr = await session.run("show version")
    """

    def __init__(
        self,
        endpoint: DeviceEndpoint,
        connect_timeout: float,
        known_hosts: str | None = None,
    ) -> None:
        """Initialize session.

        Args:
            endpoint: Device to connect to
            connect_timeout: Seconds allowed for TCP connect and SSH login
            known_hosts: Path to known_hosts file, or None to skip verification
        """
        self.endpoint = endpoint
        self.connect_timeout = connect_timeout
        self.known_hosts = known_hosts
        self._conn: asyncssh.SSHClientConnection | None = None

    async def __aenter__(self) -> "DeviceSession":
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def connect(self) -> None:
        """Open the SSH connection.

        Raises:
            DeviceError: AUTHENTICATION_FAILED, TIMEOUT or UNREACHABLE
        """
        logger.info(
            "Opening SSH session to %s (timeout=%ss)",
            self.endpoint.label,
            self.connect_timeout,
        )
        try:
            self._conn = await asyncssh.connect(
                self.endpoint.address,
                port=self.endpoint.port,
                username=self.endpoint.username,
                password=self.endpoint.password,
                known_hosts=self.known_hosts,
                client_keys=None,
                agent_path=None,
                connect_timeout=self.connect_timeout,
                login_timeout=self.connect_timeout,
            )
        except Exception as e:
            error = classify_error(e)
            logger.warning(
                "SSH session to %s failed: %s (%s)",
                self.endpoint.label,
                error.outcome.value,
                error.data,
            )
            raise error from e

    def close(self) -> None:
        """Close the connection if open. Safe to call more than once."""
        if self._conn is None:
            return
        logger.debug("Closing SSH session to %s", self.endpoint.label)
        self._conn.close()
        self._conn = None

    @property
    def connection(self) -> asyncssh.SSHClientConnection:
        """The live connection.

        Raises:
            RuntimeError: If the session is not connected
        """
        if self._conn is None:
            raise RuntimeError(f"Session to {self.endpoint.label} is not connected")
        return self._conn

    async def run(self, command: str) -> tuple[str, str]:
        """Run a one-shot command.

        Returns:
            Tuple of (stdout, stderr).
        """
        result = await self.connection.run(command, check=False)
        return _decode(result.stdout), _decode(result.stderr)

    async def open_shell(
        self,
        session_factory: Callable[[], _Session],
    ) -> tuple[asyncssh.SSHClientChannel, _Session]:
        """Request an interactive shell with a pseudo-terminal.

        Args:
            session_factory: Returns the session object receiving output events

        Returns:
            Tuple of (channel, session).
        """
        return await self.connection.create_session(
            session_factory,
            term_type=TERM_TYPE,
        )
