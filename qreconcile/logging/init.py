from __future__ import annotations

import logging
import sys

"""Logging initialization with labeled prefixes.

Every CLI line starts with a label (INFO|WARN|ERROR|SUMMARY) so that batch
runs can be grepped. The standard `logging` module is used; library modules
log through `logging.getLogger(__name__)` and only the CLI installs a handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "setup_logging",
    "set_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "question_reconciler"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Formats records as `LABEL message`."""

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{level_label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure the application logger (stdout, labeled). Idempotent.

    The `qreconcile` package logger shares the handler so debug lines from
    library modules show up with --debug.
    """
    global _logger

    if _logger is not None:
        return _logger

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())

    for name in (LOGGER_NAME, "qreconcile"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for old in logger.handlers[:]:
            logger.removeHandler(old)
        logger.addHandler(handler)
        # avoid duplicate output through the root logger
        logger.propagate = False

    _logger = logging.getLogger(LOGGER_NAME)
    return _logger


def set_debug(enabled: bool = True) -> None:
    level = logging.DEBUG if enabled else logging.INFO
    for name in (LOGGER_NAME, "qreconcile"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for h in logger.handlers:
            h.setLevel(level)


def get_logger() -> logging.Logger:
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
    for name in (LOGGER_NAME, "qreconcile"):
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
