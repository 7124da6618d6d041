# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2025 Daniel Schmidt

"""Logging configuration for the suite-reporter CLI."""

import logging
import sys
from enum import Enum

import errorhandler

_console_handler: logging.Handler | None = None


class VerbosityLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(
    level: VerbosityLevel | str, error_handler: errorhandler.ErrorHandler
) -> None:
    """Configure the root logger and reset the error tracker.

    Args:
        level: Lowest level written to stderr.
        error_handler: Tracks whether an ERROR record was logged.
    """
    level_name = level.value if isinstance(level, VerbosityLevel) else str(level).upper()
    log_level = getattr(logging, level_name, logging.WARNING)

    root = logging.getLogger()
    root.setLevel(log_level)
    global _console_handler
    if _console_handler is not None:
        root.removeHandler(_console_handler)
    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    root.addHandler(_console_handler)
    error_handler.reset()
