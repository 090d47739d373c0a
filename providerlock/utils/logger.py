"""
Logging utilities for providerlock.

Library modules only ever call :func:`get_logger`, which hands out loggers
under the ``providerlock`` hierarchy and leaves output silent until the
application opts in. The CLI calls :func:`setup_logging` once per run;
on an interactive terminal records are rendered through Rich, otherwise
through a plain stream handler so that CI logs stay free of escape codes.
"""

from __future__ import annotations

import os
import sys
import logging
import threading
from typing import IO, Optional

from rich.console import Console
from rich.logging import RichHandler

from providerlock.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

ROOT_LOGGER_NAME = "providerlock"

_logging_configured: bool = False
_lock = threading.Lock()


def _should_use_rich(stream: IO[str]) -> bool:
    """Return True if records should be rendered with Rich."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError):
        return False


def _build_handler(stream: IO[str], *, verbose: bool) -> logging.Handler:
    if _should_use_rich(stream):
        handler: logging.Handler = RichHandler(
            console=Console(file=stream),
            show_time=verbose,
            show_path=verbose,
            log_time_format=LOG_DATE_FORMAT,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler

    handler = logging.StreamHandler(stream)
    fmt = LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT
    handler.setFormatter(logging.Formatter(fmt, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Configure the ``providerlock`` logger hierarchy.

    Safe to call repeatedly: every call replaces the handlers installed by
    the previous one.

    Args:
        level: Logging level (e.g., ``logging.INFO``, ``logging.DEBUG``).
        verbose: Include timestamps and logger names in each record.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.setLevel(level)

        handler = _build_handler(stream or sys.stderr, verbose=verbose)
        handler.setLevel(level)

        root_logger.addHandler(handler)
        root_logger.propagate = False
        _logging_configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger within the providerlock namespace.

    Args:
        name: Short name (``"index"``) or a dotted ``providerlock.*`` name.

    Returns:
        A logger instance under the ``providerlock`` hierarchy.
    """
    if not name or name == ROOT_LOGGER_NAME:
        logger = logging.getLogger(ROOT_LOGGER_NAME)
    elif name.startswith(f"{ROOT_LOGGER_NAME}."):
        logger = logging.getLogger(name)
    else:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    # Stay silent until the application configures logging
    if not logger.handlers and (not logger.parent or not logger.parent.handlers):
        logger.addHandler(logging.NullHandler())

    return logger


def is_logging_configured() -> bool:
    """Return True if providerlock logging has been configured."""
    return _logging_configured


def disable_logging() -> None:
    """Disable all providerlock logging output."""
    global _logging_configured

    with _lock:
        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
        _logging_configured = False
