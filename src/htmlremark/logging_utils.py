#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the htmlremark command-line entry point.

Library modules only create module-level loggers. Handlers are installed
here, on the ``htmlremark`` package logger, and only by entry points, so an
application embedding the library keeps full control of its own root logger.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "htmlremark"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value (INFO if unknown)."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Send htmlremark log records to stderr and, optionally, to a file.

    Calling this again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "WARNING").
    log_file : str, optional
        File that receives a copy of every record, appended to.
    trace_mode : bool, default False
        Log everything down to DEBUG with timestamps and logger names, which
        shows each handler decision of a conversion.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    level = logging.DEBUG if trace_mode else resolve_level(log_level)
    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
    logger.propagate = False

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: OSError | None = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            file_error = e

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if file_error is not None:
        logger.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        logger.debug("Logging to file %s", log_file)
    return logger
