"""Central logging configuration.

Usage:
    from utils.logging_config import configure_logging
    configure_logging(level="INFO")

Idempotent: safe to call multiple times. The console sink writes to stderr
and can be suspended while the full-screen viewer owns the terminal.
"""
from __future__ import annotations
import os
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name} | {message}"

_CONFIGURED = False
_CONSOLE_ID: Optional[int] = None
_CONSOLE_OPTS: dict = {}


def configure_logging(level: str = "WARNING", json_logs: bool = False, log_file: Optional[str] = None) -> None:
    global _CONFIGURED, _CONSOLE_ID, _CONSOLE_OPTS
    if _CONFIGURED:
        return
    logger.remove()
    _CONSOLE_OPTS = {
        "level": level.upper(),
        "format": LOG_FORMAT,
        "serialize": json_logs,
        "colorize": False if json_logs else None,
    }
    _CONSOLE_ID = logger.add(sys.stderr, **_CONSOLE_OPTS)

    # Optional rotating file sink, stays active during the curses session
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        logger.add(
            log_file,
            level="DEBUG",
            format=LOG_FORMAT,
            serialize=json_logs,
            rotation="5 MB",
            retention=3,
        )
    _CONFIGURED = True


@contextmanager
def suspend_console_logging() -> Iterator[None]:
    """Detach the stderr sink for the duration of the block."""
    global _CONSOLE_ID
    if _CONSOLE_ID is None:
        yield
        return
    logger.remove(_CONSOLE_ID)
    _CONSOLE_ID = None
    try:
        yield
    finally:
        _CONSOLE_ID = logger.add(sys.stderr, **_CONSOLE_OPTS)


def reset_logging() -> None:
    """Forget previous configuration (tests)."""
    global _CONFIGURED, _CONSOLE_ID
    logger.remove()
    _CONFIGURED = False
    _CONSOLE_ID = None
