#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/timing.py
"""Timing of the parse, render and normalize stages."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator, Optional


@contextmanager
def debug_timer(logger: logging.Logger, stage: str, size: Optional[int] = None) -> Generator[None, None, None]:
    """Log the duration of a conversion stage at DEBUG level.

    Parameters
    ----------
    logger : logging.Logger
        Logger of the module running the stage
    stage : str
        Stage label, e.g. ``"Rendering (franklin)"``
    size : int, optional
        Length of the stage input in characters, appended to the message

    Examples
    --------
        >>> with debug_timer(logger, "Parsing (asciidoc)", size=len(text)):
        ...     doc = parser.parse(text)

    Notes
    -----
    Nothing is measured unless DEBUG is enabled for ``logger``, and a stage
    that raises is not reported.

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    started = time.perf_counter()
    yield
    elapsed_ms = (time.perf_counter() - started) * 1000
    if size is None:
        logger.debug("%s completed in %.1f ms", stage, elapsed_ms)
    else:
        logger.debug("%s completed in %.1f ms (%d chars)", stage, elapsed_ms, size)
