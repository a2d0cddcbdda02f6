"""Console logging utilities for chix8.

A small levelled logger printing to stdout, with optional colours and
timestamps relative to logger creation. Loggers are shared per name; the
initial level comes from the ``CHIX8_LOG_LEVEL`` environment variable.
"""

import os
import sys
import time
from typing import Dict

DEFAULT_LOG_LEVEL = "WARNING"

LEVEL_ORDER = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "chix8",
        log_level: str = DEFAULT_LOG_LEVEL,
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

    def set_level(self, log_level: str):
        level = log_level.upper()
        if level not in LEVEL_ORDER:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(LEVEL_ORDER.keys())}"
            )
        self.log_level = level

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVEL_ORDER.get(level.upper(), 1) >= LEVEL_ORDER.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


_loggers: Dict[str, ConsoleLogger] = {}


def _initial_level() -> str:
    level = os.environ.get("CHIX8_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    return level if level in LEVEL_ORDER else DEFAULT_LOG_LEVEL


def get_logger(name: str = "chix8") -> ConsoleLogger:
    """Get the shared logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name, log_level=_initial_level())
    return _loggers[name]


def set_log_level(log_level: str):
    """Change the level of every logger, including ones created later."""
    if log_level.upper() not in LEVEL_ORDER:
        raise ValueError(
            f"Unknown log level '{log_level}'. Available: {list(LEVEL_ORDER.keys())}"
        )
    os.environ["CHIX8_LOG_LEVEL"] = log_level.upper()
    for logger in _loggers.values():
        logger.set_level(log_level)
