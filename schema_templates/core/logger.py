"""
Shared logger configuration for schema-templates.

Every module obtains its logger through ``get_logger(__name__)`` so that all
diagnostics go to standard error in the same format.
"""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Configures and returns a logger with a specified name.

    A handler is attached only the first time a given name is requested, so
    repeated calls never duplicate output. ``level`` is applied on every call
    when given, which lets the CLI raise verbosity after modules have already
    created their loggers.

    Args:
        name: The name for the logger, typically the module's `__name__`.
        level: Optional level name or number (e.g. "DEBUG").

    Returns:
        A configured `logging.Logger` instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.INFO)

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)

    return logger


def set_level(level: Union[int, str], root_name: str = "schema_templates") -> None:
    """Set the level on the package logger and every child logger created so far."""
    get_logger(root_name, level)
    prefix = root_name + "."
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(prefix):
            get_logger(name, level)
