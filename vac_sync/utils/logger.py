"""
Logging configuration and utilities for the vac-sync package.

This module provides logging setup and a wrapping formatter so that long
per-chart messages stay readable in a terminal.
"""

import logging
from typing import Optional

# Default width for log message wrapping
DEFAULT_LOG_WIDTH = 120

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class WrappingFormatter(logging.Formatter):
    """
    Formatter that wraps long log messages at a fixed width.
    """

    def __init__(
        self, fmt: Optional[str] = None, datefmt: Optional[str] = None, width: int = DEFAULT_LOG_WIDTH
    ) -> None:
        """
        Initialize the wrapping formatter.

        Args:
            fmt: Format string for log messages
            datefmt: Date format string
            width: Maximum width for log message wrapping
        """
        super().__init__(fmt, datefmt)
        self.width = width

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if len(formatted) <= self.width:
            return formatted

        lines = []
        current_line = ""
        for word in formatted.split():
            if len(current_line + " " + word) <= self.width:
                current_line += (" " + word) if current_line else word
            else:
                if current_line:
                    lines.append(current_line)
                current_line = word
        if current_line:
            lines.append(current_line)
        return "\n".join(lines)


def setup_logging(verbosity: int = 0, use_wrapping: bool = False) -> None:
    """
    Setup logging configuration with multi-level verbosity.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with HTTP logs)
        use_wrapping: If True, use wrapping formatter for long messages

    Verbosity Levels:
        0 (default): WARNING - Only warnings, errors and run summaries
        1 (-d):      INFO - One line per downloaded chart
        2 (-dd):     DEBUG - Every decision, including up-to-date charts
        3+ (-ddd):   DEBUG - Maximum verbosity including HTTP request logs
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = logging.StreamHandler()
    if use_wrapping:
        handler.setFormatter(WrappingFormatter(fmt=LOG_FORMAT, width=DEFAULT_LOG_WIDTH))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # No-op when the root logger already has handlers
    logging.basicConfig(level=level, handlers=[handler])

    # httpx logs every request at INFO, which drowns the per-chart lines
    http_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    logging.getLogger("httpx").setLevel(http_level)
    logging.getLogger("httpcore").setLevel(http_level)


__all__ = [
    "WrappingFormatter",
    "setup_logging",
]
