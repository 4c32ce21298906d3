"""
Logging setup

Routes the package loggers through rich so log lines and CLI output share
one console.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LOGGING_CONFIGURED = False

LOGGER_NAMES = ('core', 'intake')


def setup_logging(level: str = 'WARNING', console: Optional[Console] = None) -> None:
    """
    Configure the package loggers once per process.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ...)
        console: Console to log to (defaults to a stderr console)
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    resolved = getattr(logging, str(level).upper(), logging.WARNING)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(resolved)
        logger.propagate = False

    _LOGGING_CONFIGURED = True
