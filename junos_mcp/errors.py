"""Failure classification for device operations.

Every low-level failure (asyncssh exception, socket error, stderr text,
inactivity) is mapped onto exactly one :class:`Outcome` here. A
:class:`DeviceError` that already carries an outcome passes through
unchanged, so an inner failure is never reclassified by an outer layer.
"""

import asyncssh

from junos_mcp.models import CommandResult, CommitResult, Messages, Outcome

AUTH_FAILURE_MARKERS = ("All configured authentication methods failed",)
TIMEOUT_MARKERS = (
    "Timed out while waiting for handshake",
    "Login timeout expired",
)


class DeviceError(Exception):
    """A device operation failure with a known outcome."""

    def __init__(
        self,
        outcome: Outcome,
        message: str,
        data: str = "",
        result: CommandResult | None = None,
    ) -> None:
        """Initialize device error.

        Args:
            outcome: Classified outcome (never SUCCESS)
            message: Fixed user-facing message
            data: Diagnostic text from the device or transport
            result: Original failed result, kept unchanged when wrapped
        """
        self.outcome = outcome
        self.message = message
        self.data = data
        self.result = result or CommandResult(
            status=outcome, message=message, data=data
        )
        super().__init__(f"{outcome.value}: {message}")

    @classmethod
    def from_result(cls, result: CommandResult) -> "DeviceError":
        """Wrap a failed result without altering its outcome."""
        return cls(result.status, result.message, result.data, result=result)

    def to_commit_result(self) -> CommitResult:
        """The failure as a CommitResult."""
        return CommitResult(status=self.outcome, message=self.message, data=self.data)


class InactivityTimeout(DeviceError):
    """No output arrived from the shell within the inactivity window."""

    def __init__(self, data: str = "") -> None:
        super().__init__(Outcome.INACTIVITY_TIMEOUT, Messages.INACTIVITY_TIMEOUT, data)


class ReplyParseError(ValueError):
    """The device reply was malformed or lacked an expected field."""


def classify_message(text: str) -> Outcome:
    """Classify raw error text.

    The same text always yields the same outcome, whichever operation
    produced it.
    """
    if any(marker in text for marker in AUTH_FAILURE_MARKERS):
        return Outcome.AUTHENTICATION_FAILED
    if any(marker in text for marker in TIMEOUT_MARKERS):
        return Outcome.TIMEOUT
    if text == Messages.INACTIVITY_TIMEOUT:
        return Outcome.INACTIVITY_TIMEOUT
    return Outcome.UNREACHABLE


def classify_error(error: BaseException) -> DeviceError:
    """Map any exception to a DeviceError.

    Args:
        error: Exception raised while talking to a device

    Returns:
        The error itself if it is already a DeviceError, otherwise a new
        DeviceError whose data is the original diagnostic text.
    """
    if isinstance(error, DeviceError):
        return error

    text = str(error) or type(error).__name__
    if isinstance(error, asyncssh.PermissionDenied):
        outcome = Outcome.AUTHENTICATION_FAILED
    elif isinstance(error, TimeoutError):
        outcome = Outcome.TIMEOUT
    else:
        outcome = classify_message(text)

    return DeviceError(outcome, Messages.for_outcome(outcome), text)
