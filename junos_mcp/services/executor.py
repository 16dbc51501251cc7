"""One-shot CLI command execution."""

import logging

from junos_mcp.errors import classify_error
from junos_mcp.models import CommandResult, DeviceEndpoint, Messages, Outcome
from junos_mcp.services.session import DeviceSession

logger = logging.getLogger(__name__)

NO_MORE = " | no-more"


async def execute_command(
    endpoint: DeviceEndpoint,
    command: str,
    timeout: float = 5.0,
    *,
    known_hosts: str | None = None,
) -> CommandResult:
    """Run a read-only command on a device.

    The pagination modifier is always appended, so output never stops at
    a ``---(more)---`` prompt. Anything written to stderr counts as a
    failure regardless of exit status.

    Args:
        endpoint: Device to run on
        command: CLI command text
        timeout: Seconds allowed for connect and login
        known_hosts: Path to known_hosts file, or None to skip verification

    Returns:
        CommandResult. Failures are returned, not raised: status holds the
        outcome and data the diagnostic text.
    """
    full_command = f"{command}{NO_MORE}"

    try:
        async with DeviceSession(endpoint, timeout, known_hosts) as session:
            stdout, stderr = await session.run(full_command)
            if stderr:
                raise RuntimeError(stderr)
    except Exception as e:
        error = classify_error(e)
        logger.warning(
            "Command %r on %s failed: %s",
            command,
            endpoint.label,
            error.outcome.value,
        )
        return error.result

    logger.debug(
        "Command %r on %s returned %d chars",
        command,
        endpoint.label,
        len(stdout),
    )
    return CommandResult(
        status=Outcome.SUCCESS,
        message=Messages.COMMAND_SUCCESS,
        data=stdout,
    )
