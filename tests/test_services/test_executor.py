"""Tests for one-shot command execution."""

from unittest.mock import AsyncMock, MagicMock

import asyncssh
import pytest

from junos_mcp.models import DeviceEndpoint, Messages, Outcome
from junos_mcp.services.executor import execute_command


@pytest.mark.asyncio
async def test_execute_appends_no_more(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Pagination is always disabled."""
    mock_connection.run.return_value = MagicMock(stdout="ge-0/0/0 up", stderr="")

    await execute_command(endpoint, "show interfaces terse")

    mock_connection.run.assert_called_once_with(
        "show interfaces terse | no-more", check=False
    )


@pytest.mark.asyncio
async def test_execute_success_returns_raw_stdout(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Successful commands return stdout unchanged."""
    output = "Interface  Admin Link\nge-0/0/0   up    up\n"
    mock_connection.run.return_value = MagicMock(stdout=output, stderr="")

    result = await execute_command(endpoint, "show interfaces terse")

    assert result.status is Outcome.SUCCESS
    assert result.message == Messages.COMMAND_SUCCESS
    assert result.data == output
    mock_connection.close.assert_called_once()


@pytest.mark.asyncio
async def test_execute_uses_timeout_for_connect(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """The timeout bounds connect and login."""
    await execute_command(endpoint, "show version", timeout=12.0)

    assert mock_connect.call_args[1]["connect_timeout"] == 12.0
    assert mock_connect.call_args[1]["login_timeout"] == 12.0


@pytest.mark.asyncio
async def test_execute_stderr_is_failure(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """Any stderr output fails the command and becomes data."""
    mock_connection.run.return_value = MagicMock(
        stdout="partial", stderr="error: syntax error", exit_status=0
    )

    result = await execute_command(endpoint, "show bogus")

    assert result.status is Outcome.UNREACHABLE
    assert result.message == Messages.UNREACHABLE
    assert result.data == "error: syntax error"
    mock_connection.close.assert_called_once()


@pytest.mark.asyncio
async def test_execute_stderr_permission_denied_is_not_auth_failure(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """A file permission error after login is not a credential failure."""
    mock_connection.run.return_value = MagicMock(
        stdout="", stderr="cat: /var/log/messages.0: Permission denied"
    )

    result = await execute_command(endpoint, "file show /var/log/messages.0")

    assert result.status is Outcome.UNREACHABLE
    assert result.message == Messages.UNREACHABLE
    assert result.data == "cat: /var/log/messages.0: Permission denied"


@pytest.mark.asyncio
async def test_execute_auth_failure(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """Authentication failures are returned, not raised."""
    mock_connect.side_effect = asyncssh.PermissionDenied("Permission denied")

    result = await execute_command(endpoint, "show version")

    assert result.status is Outcome.AUTHENTICATION_FAILED
    assert result.message == Messages.AUTHENTICATION_FAILED
    assert result.data == "Permission denied"


@pytest.mark.asyncio
async def test_execute_auth_failure_text(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """The auth-exhaustion text classifies the same way here as anywhere."""
    mock_connect.side_effect = Exception("All configured authentication methods failed")

    result = await execute_command(endpoint, "show version")

    assert result.status is Outcome.AUTHENTICATION_FAILED


@pytest.mark.asyncio
async def test_execute_handshake_timeout(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
) -> None:
    """Handshake timeouts are classified as TIMEOUT."""
    mock_connect.side_effect = TimeoutError()

    result = await execute_command(endpoint, "show version")

    assert result.status is Outcome.TIMEOUT
    assert result.message == Messages.TIMEOUT


@pytest.mark.asyncio
async def test_execute_closes_session_when_run_fails(
    endpoint: DeviceEndpoint,
    mock_connect: AsyncMock,
    mock_connection: MagicMock,
) -> None:
    """A mid-command transport error still disposes the session."""
    mock_connection.run.side_effect = asyncssh.ConnectionLost("Connection lost")

    result = await execute_command(endpoint, "show version")

    assert result.status is Outcome.UNREACHABLE
    assert result.data == "Connection lost"
    mock_connection.close.assert_called_once()
