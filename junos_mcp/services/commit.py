"""Transactional configuration commit over an interactive CLI shell.

The committer drives a pty shell through a fixed transcript:

    edit exclusive private
    <configuration lines>
    commit | display xml
    exit

and then reads everything the device prints until the channel closes.
A rolling inactivity watchdog ends the call if the device goes quiet.
The outcome is decided from the first rpc-reply in the transcript.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import asyncssh

from junos_mcp.errors import InactivityTimeout, classify_error
from junos_mcp.models import CommitResult, DeviceEndpoint, Messages, Outcome
from junos_mcp.services.session import DeviceSession
from junos_mcp.utils.reply import find_reply, node_text, parse_reply

logger = logging.getLogger(__name__)

COMMIT_SUCCESS_MARKER = "<commit-success/>"
# Extra exit in case the first sequence left a nested edit context
FINAL_EXIT = "exit\n\n\n"


def build_commit_script(config: str) -> str:
    """CLI transcript that applies and commits ``config``."""
    return f"edit exclusive private\n{config}\ncommit | display xml\nexit\n\n\n"


class ShellTranscript(asyncssh.SSHClientSession[str]):
    """Collects shell output and signals when the channel finishes."""

    def __init__(self) -> None:
        self._stdout: list[str] = []
        self._stderr: list[str] = []
        self.done: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self.on_activity: Callable[[], None] | None = None

    @property
    def output(self) -> str:
        return "".join(self._stdout)

    @property
    def errors(self) -> str:
        return "".join(self._stderr)

    def data_received(self, data: str, datatype: int | None) -> None:
        if datatype == asyncssh.EXTENDED_DATA_STDERR:
            self._stderr.append(data)
        else:
            self._stdout.append(data)
        if self.on_activity is not None:
            self.on_activity()

    def eof_received(self) -> bool:
        self._finish(None)
        return False

    def connection_lost(self, exc: Exception | None) -> None:
        self._finish(exc)

    def _finish(self, exc: Exception | None) -> None:
        if self.done.done():
            return
        if exc is not None:
            self.done.set_exception(exc)
        elif self._stderr:
            self.done.set_exception(RuntimeError(self.errors))
        else:
            self.done.set_result(None)


def _commit_error(reply: dict[str, Any]) -> str | None:
    """Message of the first xnm:error under commit-results, if any."""
    body = reply.get("rpc-reply")
    if not isinstance(body, dict):
        return None
    results = body.get("commit-results")
    if not results or not isinstance(results[0], dict):
        return None
    errors = results[0].get("xnm:error")
    if not errors:
        return None

    error = errors[0]
    if isinstance(error, dict) and error.get("message"):
        return node_text(error["message"][0]).strip()
    return node_text(error).strip()


def evaluate_commit_output(output: str) -> CommitResult:
    """Classify the full shell transcript of a commit.

    A commit error in the reply always wins over a success marker.

    Raises:
        ReplyParseError: If the rpc-reply fragment is malformed.
    """
    fragment = find_reply(output)
    if fragment is None:
        return CommitResult(
            status=Outcome.NO_REPLY, message=Messages.NO_REPLY, data=output
        )

    error_message = _commit_error(parse_reply(fragment))
    if error_message is not None:
        return CommitResult(
            status=Outcome.COMMIT_FAILED,
            message=Messages.COMMIT_ERROR,
            data=error_message,
        )

    if COMMIT_SUCCESS_MARKER in fragment:
        return CommitResult(
            status=Outcome.SUCCESS, message=Messages.COMMIT_SUCCESS, data=fragment
        )

    return CommitResult(
        status=Outcome.COMMIT_FAILED,
        message=Messages.COMMIT_NO_SUCCESS,
        data=fragment,
    )


def _rearm(watchdog: asyncio.Timeout, deadline: float) -> None:
    """Push the watchdog deadline out unless it has already fired."""
    # Output can land between expiry and the task resuming
    if not watchdog.expired():
        watchdog.reschedule(deadline)


async def _run_transcript(
    session: DeviceSession,
    config: str,
    inactivity_timeout: float,
) -> str:
    """Write the commit transcript and collect output until the shell closes.

    Raises:
        InactivityTimeout: If no output arrives for ``inactivity_timeout``.
    """
    loop = asyncio.get_running_loop()
    transcript = ShellTranscript()
    channel, _ = await session.open_shell(lambda: transcript)

    watchdog = asyncio.timeout(inactivity_timeout)
    try:
        async with watchdog:
            transcript.on_activity = lambda: _rearm(
                watchdog, loop.time() + inactivity_timeout
            )
            channel.write(build_commit_script(config))
            channel.write(FINAL_EXIT)
            await transcript.done
    except TimeoutError as e:
        if not watchdog.expired():
            raise
        logger.warning(
            "No output from %s for %ss, closing shell (inactivity)",
            session.endpoint.label,
            inactivity_timeout,
        )
        raise InactivityTimeout(transcript.output) from e
    finally:
        transcript.on_activity = None
        if not transcript.done.done():
            transcript.done.cancel()
        channel.close()

    return transcript.output


async def commit_config(
    endpoint: DeviceEndpoint,
    config: str,
    command_timeout: float = 60.0,
    inactivity_timeout: float = 30.0,
    *,
    known_hosts: str | None = None,
) -> CommitResult:
    """Apply and commit configuration lines on a device.

    Args:
        endpoint: Device to configure
        config: Configuration text, one or more ``set``/``delete`` lines
        command_timeout: Seconds allowed for connect and login
        inactivity_timeout: Seconds of silence after which the shell is closed
        known_hosts: Path to known_hosts file, or None to skip verification

    Returns:
        CommitResult with exactly one outcome. Failures are returned, not
        raised.
    """
    logger.info(
        "Committing %d config line(s) on %s",
        len(config.splitlines()),
        endpoint.label,
    )

    try:
        async with DeviceSession(endpoint, command_timeout, known_hosts) as session:
            output = await _run_transcript(session, config, inactivity_timeout)
        result = evaluate_commit_output(output)
    except Exception as e:
        error = classify_error(e)
        logger.warning(
            "Commit on %s failed: %s (%s)",
            endpoint.label,
            error.outcome.value,
            error.message,
        )
        return error.to_commit_result()

    if result.success:
        logger.info("Configuration committed on %s", endpoint.label)
    else:
        logger.warning(
            "Commit on %s finished with %s: %s",
            endpoint.label,
            result.status.value,
            result.message,
        )
    return result
