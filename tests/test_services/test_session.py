"""Tests for the per-call device session."""

from unittest.mock import AsyncMock, MagicMock

import asyncssh
import pytest

from junos_mcp.errors import DeviceError
from junos_mcp.models import DeviceEndpoint, Outcome
from junos_mcp.services.session import TERM_TYPE, DeviceSession


@pytest.mark.asyncio
async def test_connect_uses_password_credentials(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """Connection uses the endpoint credentials and timeout, no keys."""
    async with DeviceSession(endpoint, connect_timeout=7.5):
        pass

    mock_connect.assert_called_once_with(
        "192.0.2.10",
        port=830,
        username="netops",
        password="s3cret",
        known_hosts=None,
        client_keys=None,
        agent_path=None,
        connect_timeout=7.5,
        login_timeout=7.5,
    )


@pytest.mark.asyncio
async def test_connect_passes_known_hosts(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """A known_hosts path enables host key verification."""
    async with DeviceSession(endpoint, 5.0, known_hosts="/etc/junos/known_hosts"):
        pass

    assert mock_connect.call_args[1]["known_hosts"] == "/etc/junos/known_hosts"


@pytest.mark.asyncio
async def test_session_closes_on_normal_exit(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Leaving the context closes the connection."""
    async with DeviceSession(endpoint, 5.0):
        mock_connection.close.assert_not_called()

    mock_connection.close.assert_called_once()


@pytest.mark.asyncio
async def test_session_closes_on_exception(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """The connection is closed even when the body raises."""
    with pytest.raises(ValueError):
        async with DeviceSession(endpoint, 5.0):
            raise ValueError("boom")

    mock_connection.close.assert_called_once()


@pytest.mark.asyncio
async def test_close_is_idempotent(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Closing twice closes the connection once."""
    session = DeviceSession(endpoint, 5.0)
    await session.connect()

    session.close()
    session.close()

    mock_connection.close.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (asyncssh.PermissionDenied("Permission denied"), Outcome.AUTHENTICATION_FAILED),
        (TimeoutError(), Outcome.TIMEOUT),
        (OSError("Connection refused"), Outcome.UNREACHABLE),
    ],
)
async def test_connect_failures_are_classified(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    error: Exception,
    expected: Outcome,
) -> None:
    """Transport failures surface as classified DeviceErrors."""
    mock_connect.side_effect = error

    with pytest.raises(DeviceError) as exc_info:
        async with DeviceSession(endpoint, 5.0):
            pass

    assert exc_info.value.outcome is expected


@pytest.mark.asyncio
async def test_run_returns_stdout_and_stderr(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """run() decodes bytes output and maps None to empty strings."""
    mock_connection.run.return_value = MagicMock(stdout=b"up\n", stderr=None)

    async with DeviceSession(endpoint, 5.0) as session:
        stdout, stderr = await session.run("show version")

    assert stdout == "up\n"
    assert stderr == ""
    mock_connection.run.assert_called_once_with("show version", check=False)


@pytest.mark.asyncio
async def test_open_shell_requests_pty(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Interactive shells are opened with a vt100 pseudo-terminal."""
    channel, shell_session = MagicMock(), MagicMock()
    mock_connection.create_session = AsyncMock(return_value=(channel, shell_session))

    def factory() -> MagicMock:
        return shell_session

    async with DeviceSession(endpoint, 5.0) as session:
        result = await session.open_shell(factory)

    assert result == (channel, shell_session)
    mock_connection.create_session.assert_called_once_with(factory, term_type=TERM_TYPE)


def test_connection_requires_connect(endpoint: DeviceEndpoint) -> None:
    """Using a session before connecting is a programming error."""
    with pytest.raises(RuntimeError):
        DeviceSession(endpoint, 5.0).connection
