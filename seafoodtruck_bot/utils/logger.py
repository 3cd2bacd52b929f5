"""
Logger Utility
==============

Small context-aware logger used across the bot.

Each component creates its own Logger with a context name, so a single
mention can be traced from the webhook through the assembler to the
food truck API:

    [2024-05-06T08:00:01] [INFO] [Assembler] find events for today
    [2024-05-06T08:00:01] [DEBUG] [FoodTruckClient] GET /locations/123

The minimum level is process wide and is set once at startup through
configure_logging(); loggers created at import time pick it up lazily.

Usage:
    from seafoodtruck_bot.utils.logger import Logger, configure_logging

    configure_logging("debug")
    log = Logger("Responder")
    log.info("Posting events", {"channel": "C123"})
    log.error("Post failed", exc)
"""

import json
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, TextIO


class LogLevel(IntEnum):
    """Log levels, higher is more severe."""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class Colors:
    """ANSI escape codes for colored terminal output."""
    RESET = "\033[0m"
    DEBUG = "\033[36m"    # Cyan
    INFO = "\033[32m"     # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"    # Red
    DIM = "\033[2m"


_LEVEL_NAMES = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
}

_min_level: LogLevel = LogLevel.INFO


def parse_level(name: str | None) -> LogLevel:
    """Map a level name to a LogLevel, defaulting to INFO."""
    if not name:
        return LogLevel.INFO
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


def configure_logging(level: str | None) -> LogLevel:
    """
    Set the minimum level for every Logger in the process.

    Args:
        level: Level name from configuration (e.g. "debug")

    Returns:
        The level that is now in effect
    """
    global _min_level
    _min_level = parse_level(level)
    return _min_level


def _use_color(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Logger:
    """
    A context-aware logger with colored output.

    Example:
        log = Logger("Assembler")
        log.info("Resolving location", {"location": "westlake"})

        events_log = log.child("Events")   # [Assembler:Events]
    """

    def __init__(self, context: str = ""):
        self.context = context

    def child(self, child_context: str) -> "Logger":
        """Create a logger whose context is nested under this one."""
        new_context = f"{self.context}:{child_context}" if self.context else child_context
        return Logger(new_context)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= _min_level

    def _format_message(self, level_name: str, message: str, color: str | None) -> str:
        """
        Format as: [TIMESTAMP] [LEVEL] [context] message
        """
        timestamp = datetime.now().isoformat(timespec="seconds")
        context_str = f"[{self.context}] " if self.context else ""
        if color is None:
            return f"[{timestamp}] [{level_name}] {context_str}{message}"
        return (
            f"{Colors.DIM}[{timestamp}]{Colors.RESET} "
            f"{color}[{level_name}]{Colors.RESET} "
            f"{context_str}{message}"
        )

    def _log(
        self,
        level: LogLevel,
        level_name: str,
        color: str,
        message: str,
        data: dict[str, Any] | None = None
    ) -> None:
        if not self.is_enabled_for(level):
            return

        stream = sys.stderr if level >= LogLevel.ERROR else sys.stdout
        colored = _use_color(stream)
        print(self._format_message(level_name, message, color if colored else None), file=stream)

        if data:
            data_str = json.dumps(data, indent=2, default=str)
            if colored:
                data_str = f"{Colors.DIM}{data_str}{Colors.RESET}"
            print(data_str, file=stream)

    def debug(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a debug message (only shown with LOG_LEVEL=debug)."""
        self._log(LogLevel.DEBUG, "DEBUG", Colors.DEBUG, message, data)

    def info(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log an info message."""
        self._log(LogLevel.INFO, "INFO", Colors.INFO, message, data)

    def warning(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Log a warning message."""
        self._log(LogLevel.WARNING, "WARN", Colors.WARNING, message, data)

    def error(
        self,
        message: str,
        error: BaseException | None = None,
        data: dict[str, Any] | None = None
    ) -> None:
        """
        Log an error message.

        Args:
            message: The error message
            error: Optional exception; its type and text are appended
            data: Optional extra structured data
        """
        payload = dict(data) if data else {}
        if error is not None:
            payload["error_type"] = type(error).__name__
            payload["error_message"] = str(error)
        self._log(LogLevel.ERROR, "ERROR", Colors.ERROR, message, payload or None)


logger = Logger("SeaFoodTruckBot")
