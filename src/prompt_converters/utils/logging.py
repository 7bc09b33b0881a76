"""Logging setup for the command line.

Library modules only create loggers; handlers are installed here, by the
CLI, so that embedding applications keep control of their own logging.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "prompt_converters"


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route package logs through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING
        console: Console to write to; defaults to stderr

    Returns:
        The package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace."""
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
