"""Logging setup shared by all fogtopo modules."""

from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "fogtopo"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module.

    Args:
        name: Dotted module name, normally ``__name__``. Names below
            ``fogtopo`` follow the level set by :func:`set_global_log_level`.
    """
    return logging.getLogger(name)


def set_global_log_level(level: int | str) -> None:
    """Route log records to stderr and set the level of the fogtopo loggers.

    Per-line parse problems of the dataset reader are logged at DEBUG, so
    ``logging.DEBUG`` lists every skipped line.

    Args:
        level: Numeric level such as ``logging.INFO`` or a level name such as
            ``"debug"``.

    Raises:
        ValueError: If ``level`` is not a known level name.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
