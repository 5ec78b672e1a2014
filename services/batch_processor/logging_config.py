"""
Leveled console logging for the batch processor.

Supported levels, from quietest to most verbose:
    silent < error < info < debug

Informational and debug messages go to stdout, warnings and errors to
stderr. Every line is prefixed with its level, e.g. ``[INFO] ...``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "services.batch_processor"
LOG_FORMAT = "[%(levelname)s] %(message)s"

# "silent" sits above CRITICAL so nothing passes the threshold.
SILENT = logging.CRITICAL + 10

LOG_LEVELS = {
    "silent": SILENT,
    "error": logging.ERROR,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}
FALLBACK_LEVEL = "info"

_HANDLER_MARKER = "_batch_processor_handler"


def resolve_log_level(level_name: Optional[str]) -> str:
    """Return a known level name, falling back to ``info`` for anything unrecognized."""
    level = (level_name or FALLBACK_LEVEL).strip().lower()
    if level not in LOG_LEVELS:
        return FALLBACK_LEVEL
    return level


class _MaxLevelFilter(logging.Filter):
    """Pass only records strictly below ``max_level``."""

    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.max_level


def configure_logging(level_name: Optional[str] = None) -> logging.Logger:
    """
    Install stdout/stderr handlers on the package logger.

    Safe to call more than once: handlers installed by a previous call are
    replaced, so the streams always reflect the current ``sys.stdout`` and
    ``sys.stderr``.

    Args:
        level_name: One of silent|error|info|debug. Unknown values map to info.

    Returns:
        The configured package logger
    """
    level = LOG_LEVELS[resolve_log_level(level_name)]
    package_logger = logging.getLogger(LOGGER_NAME)

    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.addFilter(_MaxLevelFilter(logging.WARNING))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.WARNING)

    for handler in (stdout_handler, stderr_handler):
        setattr(handler, _HANDLER_MARKER, True)
        package_logger.addHandler(handler)

    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


def log_exception(logger: logging.Logger, exc: BaseException) -> None:
    """Log ``exc`` at error level, with its traceback only when debug is enabled."""
    logger.error(
        "%s",
        exc,
        exc_info=exc if logger.isEnabledFor(logging.DEBUG) else None,
    )


__all__ = ["LOG_LEVELS", "configure_logging", "log_exception", "resolve_log_level"]
