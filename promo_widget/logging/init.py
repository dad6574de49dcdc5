from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Labeled console logging for the widget generator.

Each line is ``<LABEL> <message>`` where LABEL is one of
DEBUG|INFO|WARN|ERROR|SUMMARY. Modules log through
``logging.getLogger(__name__)``; since the package is named ``promo_widget``
those loggers are children of ``LOGGER_NAME`` and reach its single handler.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "setup_logging",
]

LOGGER_NAME = "promo_widget"

# sits between INFO (20) and WARNING (30)
SUMMARY_LEVEL = 25

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """``LABEL message``; WARNING is shortened to WARN."""

    LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(stream: TextIO | None = None) -> logging.Logger:
    """Attach the labeled handler to the package logger once per process.

    The handler writes to ``stream`` (stdout unless given), which is looked up
    at call time; tests that capture stdout call ``reset_logging`` first.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)

    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(LabeledFormatter())
    console.setLevel(logging.INFO)
    logger.addHandler(console)
    logger.setLevel(logging.INFO)
    # the root logger must not print the same record again
    logger.propagate = False

    _configured = logger
    return logger


def get_logger() -> logging.Logger:
    return _configured or setup_logging()


def set_debug(logger: logging.Logger) -> None:
    """Lower the logger and its handlers to DEBUG (``--debug``)."""
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup binds a fresh stream."""
    global _configured
    _configured = None
