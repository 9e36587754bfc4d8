#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/logging_utils.py
"""Root logging setup for the ``adoc2html`` command and docs server."""

from __future__ import annotations

import logging
import sys
from typing import Optional

SIMPLE_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore")


def resolve_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its number; unknown names give INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root handlers with a stderr handler and an optional file handler.

    Parameters
    ----------
    log_level : int | str
        Level number or name
    log_file : str, optional
        File that receives the same records as stderr, opened for append
    trace_mode : bool, default False
        Use the verbose format with timestamps and logger names

    Returns
    -------
    logging.Logger
        The root logger

    """
    level = resolve_level(log_level)
    formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(SIMPLE_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    file_error: Optional[OSError] = None
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            file_error = exc

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if file_error is not None:
        root.warning("Could not open log file %s: %s", log_file, file_error)
    elif log_file:
        root.info("Logging to file: %s", log_file)

    if level > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root
