#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core utility functions for the project.

This module provides the process-wide logging setup: every record is written
as `[YYYY-MM-DD HH:MM:SS] message` to both the durable log file and the
console. Logging is best-effort; a sink that cannot be opened or written to
never aborts the caller.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

from installer.config import LOG_DATE_FORMAT

module_logger = logging.getLogger(__name__)

TIMESTAMPED_LOG_FORMAT = "[%(asctime)s] %(message)s"

# Handlers installed by setup_logging, closed again by shutdown_logging.
_INSTALLED_HANDLERS: List[logging.Handler] = []


class TimestampFormatter(logging.Formatter):
    """
    Formats records as `[YYYY-MM-DD HH:MM:SS] message`, matching the layout of
    the installer log file.
    """

    def __init__(self, fmt=None, datefmt=None):
        super().__init__(
            fmt or TIMESTAMPED_LOG_FORMAT, datefmt or LOG_DATE_FORMAT
        )


class BestEffortFileHandler(logging.FileHandler):
    """
    Append-only file handler that reports its first write failure on stderr
    and stays quiet afterwards (e.g. disk full, file removed mid-run).
    """

    def __init__(self, filename, mode="a", encoding="utf-8", delay=False):
        super().__init__(filename, mode=mode, encoding=encoding, delay=delay)
        self.write_failed = False

    def handleError(self, record: logging.LogRecord) -> None:
        if self.write_failed:
            return
        self.write_failed = True
        exc = sys.exc_info()[1]
        try:
            sys.stderr.write(
                f"Warning: Could not write to log file {self.baseFilename}: {exc}. "
                "Further file logging errors will be suppressed.\n"
            )
        except (OSError, ValueError):
            pass


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_to_console: bool = True,
    log_format_str: Optional[str] = None,
) -> None:
    """
    Configures logging for the installer.

    Parameters:
    log_level: int
        The logging level to configure. Defaults to logging.INFO.
    log_file: Optional[str]
        The file path for the log file. Parent directories are created and the
        file is opened in append mode. Defaults to None.
    log_to_console: bool
        Whether to log to the console (stdout). Defaults to True.
    log_format_str: Optional[str]
        A custom log format string. Defaults to TIMESTAMPED_LOG_FORMAT.

    If the log file cannot be opened, a warning is printed to stderr and
    logging continues on the console only.

    Returns:
    None
    """
    shutdown_logging()

    handlers: List[logging.Handler] = []
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(BestEffortFileHandler(log_file_path, mode="a"))
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    if log_to_console or not handlers:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = TimestampFormatter(fmt=log_format_str)
    for handler in handlers:
        handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for handler in handlers:
        root_logger.addHandler(handler)
        _INSTALLED_HANDLERS.append(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}. File: {log_file or 'none'}"
    )


def shutdown_logging() -> None:
    """Flush and close the handlers installed by setup_logging."""
    root_logger = logging.getLogger()
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        root_logger.removeHandler(handler)
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError) as e:
            print(f"Warning: Could not close log handler: {e}", file=sys.stderr)


def level_from_name(level_name: str) -> int:
    """Map a level name such as 'debug' to its logging constant, defaulting to INFO."""
    numeric_level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(numeric_level, int):
        return logging.INFO
    return numeric_level
