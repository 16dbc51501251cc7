"""Operation result data models."""

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    """Closed classification of a device operation's result."""

    SUCCESS = "success"
    AUTHENTICATION_FAILED = "authentication failed"
    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    COMMIT_FAILED = "commit_failed"
    NO_REPLY = "no_rpc_reply"
    INACTIVITY_TIMEOUT = "inactivity_timeout"


class Messages:
    """User-facing message for each outcome."""

    COMMAND_SUCCESS = "Command executed successfully"
    COMMIT_SUCCESS = "Configuration committed successfully"
    AUTHENTICATION_FAILED = "Authentication failed. Check your username and password."
    TIMEOUT = "Connection timed out"
    UNREACHABLE = "Unable to connect to host"
    COMMIT_ERROR = "Commit error"
    COMMIT_NO_SUCCESS = "Commit did not return success"
    NO_REPLY = "No RPC reply found in the response"
    INACTIVITY_TIMEOUT = "Session closed due to inactivity"

    @classmethod
    def for_outcome(cls, outcome: Outcome) -> str:
        """Default message for a failure outcome."""
        return {
            Outcome.AUTHENTICATION_FAILED: cls.AUTHENTICATION_FAILED,
            Outcome.TIMEOUT: cls.TIMEOUT,
            Outcome.UNREACHABLE: cls.UNREACHABLE,
            Outcome.COMMIT_FAILED: cls.COMMIT_ERROR,
            Outcome.NO_REPLY: cls.NO_REPLY,
            Outcome.INACTIVITY_TIMEOUT: cls.INACTIVITY_TIMEOUT,
            Outcome.SUCCESS: cls.COMMAND_SUCCESS,
        }[outcome]


@dataclass(frozen=True)
class CommandResult:
    """Result of a one-shot command execution."""

    status: Outcome
    message: str
    data: str

    @property
    def success(self) -> bool:
        """Whether the command succeeded."""
        return self.status is Outcome.SUCCESS

    def to_dict(self) -> dict[str, str]:
        """Convert to a plain mapping."""
        return {
            "status": self.status.value,
            "message": self.message,
            "data": self.data,
        }


@dataclass(frozen=True)
class CommitResult(CommandResult):
    """Result of a configuration commit.

    `data` holds the raw rpc-reply fragment on success, diagnostic text
    otherwise.
    """
