#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the adoc2html reader and converters.

Options are frozen dataclasses, validated when constructed and cloned with
``create_updated``.
"""

from __future__ import annotations

from adoc2html.options.asciidoc import AsciiDocOptions
from adoc2html.options.base import CloneFrozenMixin
from adoc2html.options.conversion import ConversionOptions

__all__ = [
    "AsciiDocOptions",
    "CloneFrozenMixin",
    "ConversionOptions",
]
