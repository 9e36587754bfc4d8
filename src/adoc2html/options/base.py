#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/options/base.py
"""Base class for reader and conversion options.

Options are frozen dataclasses: a conversion never mutates the options it
was given, and callers derive variants with :meth:`CloneFrozenMixin.create_updated`.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-on-update support for frozen option dataclasses."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        The copy runs ``__post_init__`` again, so the new values are validated
        the same way as at construction.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            The updated copy

        Raises
        ------
        ValueError
            If a keyword is not a field of this options class, or a new value
            fails validation

        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ValueError(f"{type(self).__name__} has no option(s): {', '.join(unknown)}")
        return replace(self, **kwargs)
