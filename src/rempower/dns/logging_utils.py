"""Logging helpers for the DNS switching tool."""

from __future__ import annotations

import logging

LOG_FILE = "/tmp/rempower.log"


class LoggingManager:
    """Manage DNS tool logging configuration and messages."""

    def __init__(self, logger_name: str = "rempower") -> None:
        self.logger = logging.getLogger(logger_name)
        self.logger.propagate = False

    def setup(self, verbose: bool, log_file: str | None = LOG_FILE) -> None:
        """Configure logging to the console and, when writable, a log file."""
        level = logging.DEBUG if verbose else logging.INFO

        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")

        handlers: list[logging.Handler] = []
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        handlers.append(console)

        if log_file:
            try:
                file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
                file_handler.setFormatter(formatter)
                handlers.append(file_handler)
            except OSError:
                # Fall back to console-only logging.
                pass

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)
        self.logger.setLevel(level)

    def log(self, msg: str, *args: object) -> None:
        """Log an informational message."""
        self.logger.info(msg, *args)

    def debug(self, msg: str, *args: object) -> None:
        """Log a debug message."""
        self.logger.debug(msg, *args)


DEFAULT_LOGGER = LoggingManager()
