"""
Logging configuration for proto_codegen.

Modules obtain loggers through get_logger(); applications that want
console output call setup_logging() once.
"""

import logging
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "proto_codegen"

_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    console: Optional[Console] = None,
    show_path: bool = False,
) -> logging.Logger:
    """
    Attach a rich console handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number
        console: Console to write to (defaults to stderr)
        show_path: Whether to show the source location of each record

    Returns:
        The package logger
    """
    global _configured

    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=show_path,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True

    return logger


# Library default: stay silent unless the application configures logging
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())
