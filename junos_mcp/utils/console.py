"""Colorful console logging formatter with EST timestamps."""

import logging
import re
from datetime import datetime
from zoneinfo import ZoneInfo

# ANSI color codes
COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    # Foreground colors
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    # Bright foreground colors
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bright_white": "\033[97m",
    # Background colors
    "bg_red": "\033[41m",
    "bg_green": "\033[42m",
    "bg_yellow": "\033[43m",
    "bg_blue": "\033[44m",
}

# Log level colors
LEVEL_COLORS = {
    "DEBUG": COLORS["bright_black"],
    "INFO": COLORS["bright_green"],
    "WARNING": COLORS["bright_yellow"],
    "ERROR": COLORS["bright_red"],
    "CRITICAL": COLORS["bg_red"] + COLORS["white"] + COLORS["bold"],
}

# Component colors for logger names
COMPONENT_COLORS = {
    "junos_mcp.server": COLORS["bright_cyan"],
    "junos_mcp.services.session": COLORS["bright_magenta"],
    "junos_mcp.services.commit": COLORS["bright_blue"],
    "junos_mcp.services": COLORS["blue"],
    "junos_mcp.tools": COLORS["cyan"],
    "junos_mcp.middleware": COLORS["yellow"],
    "junos_mcp.config": COLORS["green"],
    "default": COLORS["white"],
}

ENDPOINT_PATTERN = re.compile(r"([\w.\-]+@[\w.\-:]+:\d+)")
DURATION_PATTERN = re.compile(r"(\d+\.?\d*m?s)\b")
OUTCOME_PATTERN = re.compile(
    r"\b(success|authentication failed|unreachable|timeout|commit_failed"
    r"|no_rpc_reply|inactivity_timeout)\b"
)

EST = ZoneInfo("America/New_York")


class ColorfulFormatter(logging.Formatter):
    """Colorful log formatter with EST timestamps and component highlighting."""

    def __init__(self, use_colors: bool = True) -> None:
        """Initialize the formatter.

        Args:
            use_colors: Whether to use ANSI colors.
        """
        super().__init__()
        self.use_colors = use_colors

    def _colorize(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if not self.use_colors:
            return text
        return f"{color}{text}{COLORS['reset']}"

    def _get_component_color(self, name: str) -> str:
        """Get color for a logger name/component."""
        for prefix, color in COMPONENT_COLORS.items():
            if prefix != "default" and name.startswith(prefix):
                return color
        return COMPONENT_COLORS["default"]

    def _format_timestamp(self, record: logging.LogRecord) -> str:
        """Format timestamp in EST with nice formatting."""
        dt = datetime.fromtimestamp(record.created, tz=EST)
        time_str = dt.strftime("%H:%M:%S")
        date_str = dt.strftime("%m/%d")
        ms_str = f".{int(record.msecs):03d}"
        return f"{time_str}{ms_str} {date_str}"

    def _format_level(self, record: logging.LogRecord) -> str:
        """Format log level with color and fixed width."""
        level = record.levelname
        color = LEVEL_COLORS.get(level, COLORS["white"])
        padded = f"{level:<8}"
        return self._colorize(padded, color)

    def _format_component(self, record: logging.LogRecord) -> str:
        """Format component/logger name with color."""
        name = record.name
        # Shorten common prefixes
        if name.startswith("junos_mcp."):
            name = name[10:]  # Remove "junos_mcp." prefix
        color = self._get_component_color(record.name)
        return self._colorize(f"{name:<20}", color)

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors and EST timestamp."""
        # Timestamp (dim)
        timestamp = self._format_timestamp(record)
        timestamp = self._colorize(timestamp, COLORS["dim"])

        # Level (colored by severity)
        level = self._format_level(record)

        # Component/logger name (colored by type)
        component = self._format_component(record)

        # Separator
        sep = self._colorize("|", COLORS["dim"])

        message = self._highlight_message(record.getMessage())

        return f"{timestamp} {sep} {level} {sep} {component} {sep} {message}"

    def _highlight_message(self, message: str) -> str:
        """Highlight device endpoints, outcomes and durations."""
        if not self.use_colors:
            return message

        # user@address:port
        message = ENDPOINT_PATTERN.sub(
            f"{COLORS['bright_magenta']}\\1{COLORS['reset']}", message
        )
        message = DURATION_PATTERN.sub(
            f"{COLORS['bright_yellow']}\\1{COLORS['reset']}", message
        )
        message = OUTCOME_PATTERN.sub(
            f"{COLORS['bright_cyan']}\\1{COLORS['reset']}", message
        )
        return message


class MCPRequestFormatter(ColorfulFormatter):
    """Extended formatter with MCP request/response details."""

    def format(self, record: logging.LogRecord) -> str:
        """Format with a leading marker for notable events."""
        base = super().format(record)

        if not self.use_colors:
            return base

        message = record.getMessage().lower()

        if "starting" in message or "ready" in message:
            return f"{COLORS['bright_green']}>>>{COLORS['reset']} {base}"
        elif "shutting down" in message or "shutdown" in message:
            return f"{COLORS['bright_red']}<<<{COLORS['reset']} {base}"
        elif "error" in message or "failed" in message:
            return f"{COLORS['bright_red']}!!{COLORS['reset']}  {base}"
        elif "inactivity" in message or "slow" in message:
            return f"{COLORS['bright_yellow']}!{COLORS['reset']}   {base}"
        elif "committed" in message or "succeeded" in message:
            return f"{COLORS['bright_green']}OK{COLORS['reset']}  {base}"
        elif "opening" in message:
            return f"{COLORS['bright_cyan']}+{COLORS['reset']}   {base}"
        elif "closing" in message:
            return f"{COLORS['bright_yellow']}-{COLORS['reset']}   {base}"

        return f"    {base}"
