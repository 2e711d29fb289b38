"""Logging for the format package.

A single process-wide :class:`FormatLogger` wraps the standard ``logging``
logger named ``format_pkg`` and additionally keeps the structured validation
issues reported through :meth:`FormatLogger.add_validation_issue`.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

__all__ = [
    'FormatLogger',
    'get_logger',
    'setup_logging',
]

LOGGER_NAME = 'format_pkg'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_LOGGER = None
_LOGGER_LOCK = threading.Lock()


class FormatLogger:
    """Thin wrapper around a stdlib logger with structured issue tracking."""

    def __init__(self, name: str = LOGGER_NAME):
        self._logger = logging.getLogger(name)
        self.validation_issues: List[Dict[str, Any]] = []

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def debug(self, msg, *args, **kwargs):
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg, *args, **kwargs):
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg, *args, **kwargs):
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg, *args, **kwargs):
        self._logger.error(msg, *args, **kwargs)

    def add_validation_issue(
        self,
        level: str,
        category: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Record a structured validation issue and log it.

        Args:
            level: Log level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
            category: Issue category (e.g. 'schema', 'record')
            message: Human readable description
            details: Optional extra context (field, value, format, ...)
        """
        issue = {
            'level': level.upper(),
            'category': category,
            'message': message,
            'details': dict(details or {}),
        }
        self.validation_issues.append(issue)

        numeric_level = logging.getLevelName(issue['level'])
        if not isinstance(numeric_level, int):
            numeric_level = logging.WARNING
        self._logger.log(numeric_level, f"[{category}] {message}")

    def clear_issues(self) -> None:
        self.validation_issues.clear()


def get_logger() -> FormatLogger:
    """Return the process-wide FormatLogger, creating it on first use."""
    global _LOGGER
    with _LOGGER_LOCK:
        if _LOGGER is None:
            _LOGGER = FormatLogger()
        return _LOGGER


def setup_logging(
    console_level: Union[str, int] = 'INFO',
    log_file: Optional[Path] = None,
    file_level: Union[str, int] = 'DEBUG'
) -> FormatLogger:
    """
    Configure console and optional file output for the package logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        console_level: Level for the console handler
        log_file: Optional path of a log file (parent directories are created)
        file_level: Level for the file handler

    Returns:
        The configured FormatLogger
    """
    format_logger = get_logger()
    base = format_logger.logger
    base.setLevel(logging.DEBUG)

    for handler in list(base.handlers):
        base.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(formatter)
    base.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        base.addHandler(file_handler)

    return format_logger
