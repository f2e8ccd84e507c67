"""
Logging capability passed into the engine and checks.

Any object with debug/info/warning/error methods works; a standard
``logging.Logger`` is the usual choice. Without one, output is discarded.
"""

import logging
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "slopgate"


class Logger(Protocol):
    def debug(self, msg: str, *args, **kwargs) -> None: ...

    def info(self, msg: str, *args, **kwargs) -> None: ...

    def warning(self, msg: str, *args, **kwargs) -> None: ...

    def error(self, msg: str, *args, **kwargs) -> None: ...


def null_logger() -> logging.Logger:
    """A logger that drops everything."""
    logger = logging.getLogger(f"{LOGGER_NAME}.null")
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False
    return logger


def configure_logging(console: Console, verbose: bool = False) -> logging.Logger:
    """Route ``slopgate`` logs to a rich console."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
