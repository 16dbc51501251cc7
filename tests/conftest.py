"""Shared fixtures for Junos MCP tests."""

import asyncio
from collections.abc import Callable, Generator, Sequence
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import asyncssh
import pytest

from junos_mcp.models import DeviceEndpoint
from junos_mcp.services.state import reset_state

SYSTEM_INFORMATION_REPLY = """\
<rpc-reply xmlns:junos="http://xml.juniper.net/junos/21.4R0/junos">
    <system-information>
        <hardware-model>mx204</hardware-model>
        <os-name>junos</os-name>
        <os-version>21.4R3-S1.6</os-version>
        <serial-number>JN1234567890</serial-number>
        <host-name>edge-r1</host-name>
    </system-information>
    <cli>
        <banner></banner>
    </cli>
</rpc-reply>
"""

COMMIT_SUCCESS_REPLY = (
    '<rpc-reply xmlns:junos="http://xml.juniper.net/junos/21.4R0/junos">'
    "<commit-results>"
    '<routing-engine junos:style="normal">'
    "<name>re0</name>"
    "<commit-success/>"
    "</routing-engine>"
    "</commit-results>"
    "</rpc-reply>"
)

COMMIT_ERROR_REPLY = (
    '<rpc-reply xmlns:junos="http://xml.juniper.net/junos/21.4R0/junos">'
    "<commit-results>"
    '<xnm:error xmlns="http://xml.juniper.net/xnm/1.1/xnm" '
    'xmlns:xnm="http://xml.juniper.net/xnm/1.1/xnm">'
    "<message>\nconfiguration database locked\n</message>"
    "</xnm:error>"
    "</commit-results>"
    "</rpc-reply>"
)


class FakeShell:
    """Scripted interactive shell standing in for an asyncssh channel.

    Output is delivered to the session object only after both transcript
    writes have happened, one chunk every ``interval`` seconds, followed by
    channel close unless ``close`` is False.
    """

    def __init__(
        self,
        chunks: Sequence[str] = (),
        stderr: Sequence[str] = (),
        interval: float = 0.0,
        close: bool = True,
        close_exc: Exception | None = None,
    ) -> None:
        self.chunks = list(chunks)
        self.stderr = list(stderr)
        self.interval = interval
        self.close = close
        self.close_exc = close_exc
        self.writes: list[str] = []
        self.session: Any = None
        self.kwargs: dict[str, Any] = {}
        self.channel = MagicMock()
        self.channel.write.side_effect = self._on_write

    async def create_session(self, factory: Any, **kwargs: Any) -> tuple[Any, Any]:
        self.session = factory()
        self.kwargs = kwargs
        return self.channel, self.session

    def _on_write(self, data: str) -> None:
        self.writes.append(data)
        if len(self.writes) == 2:
            self._play()

    def _play(self) -> None:
        loop = asyncio.get_running_loop()
        delay = 0.0
        for chunk in self.chunks:
            delay += self.interval
            loop.call_later(delay, self.session.data_received, chunk, None)
        for chunk in self.stderr:
            delay += self.interval
            loop.call_later(
                delay,
                self.session.data_received,
                chunk,
                asyncssh.EXTENDED_DATA_STDERR,
            )
        if self.close:
            loop.call_later(
                delay + self.interval, self.session.connection_lost, self.close_exc
            )


@pytest.fixture(autouse=True)
def clean_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate global config and JUNOS_* environment between tests."""
    for key in (
        "JUNOS_COMMAND_TIMEOUT",
        "JUNOS_COMMIT_TIMEOUT",
        "JUNOS_INACTIVITY_TIMEOUT",
        "JUNOS_KNOWN_HOSTS",
        "JUNOS_TRANSPORT",
        "JUNOS_HTTP_HOST",
        "JUNOS_HTTP_PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_state()
    yield
    reset_state()


@pytest.fixture
def endpoint() -> DeviceEndpoint:
    """Device endpoint used across tests."""
    return DeviceEndpoint(
        address="192.0.2.10",
        username="netops",
        password="s3cret",
        port=830,
    )


@pytest.fixture
def mock_connection() -> MagicMock:
    """asyncssh connection double with an async run()."""
    conn = MagicMock()
    conn.run = AsyncMock(return_value=MagicMock(stdout="", stderr=""))
    return conn


@pytest.fixture
def mock_connect(mock_connection: MagicMock) -> Generator[AsyncMock, None, None]:
    """Patch asyncssh.connect to hand out ``mock_connection``."""
    with patch("asyncssh.connect", new_callable=AsyncMock) as connect:
        connect.return_value = mock_connection
        yield connect


@pytest.fixture
def make_shell(mock_connection: MagicMock) -> Callable[..., FakeShell]:
    """Build a FakeShell and route the connection's create_session to it."""

    def make(**kwargs: Any) -> FakeShell:
        shell = FakeShell(**kwargs)
        mock_connection.create_session = shell.create_session
        return shell

    return make


@pytest.fixture
def system_information_reply() -> str:
    return SYSTEM_INFORMATION_REPLY


@pytest.fixture
def commit_success_reply() -> str:
    return COMMIT_SUCCESS_REPLY


@pytest.fixture
def commit_error_reply() -> str:
    return COMMIT_ERROR_REPLY


@pytest.fixture
def fake_shell_cls() -> type[FakeShell]:
    """FakeShell class for tests wiring several connections by hand."""
    return FakeShell
