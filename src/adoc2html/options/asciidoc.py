#  Copyright (c) 2025 Tom Villani, Ph.D.

# adoc2html/options/asciidoc.py
"""Configuration options for reading AsciiDoc source.

This module defines the options class for the AsciiDoc reader that builds
the node tree consumed by the HTML converters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from adoc2html.constants import (
    DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY,
    DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS,
    DEFAULT_ASCIIDOC_PARSE_ADMONITIONS,
    DEFAULT_ASCIIDOC_PARSE_TABLE_SPANS,
    AttributeMissingPolicy,
)
from adoc2html.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class AsciiDocOptions(CloneFrozenMixin):
    """Configuration options for AsciiDoc reading.

    Parameters
    ----------
    attributes : Mapping[str, str], default empty
        Attribute overrides applied on top of the document's own attribute
        entries. A value ending in ``@`` is a soft set: the document may
        still redefine it.
    attribute_missing_policy : {"keep", "blank", "warn"}, default "keep"
        What to do with references to undefined attributes:
        - "keep": leave ``{name}`` in the text
        - "blank": drop the reference
        - "warn": keep the reference and log a warning
    parse_admonitions : bool, default True
        Whether ``NOTE:`` paragraphs and ``[NOTE]`` blocks become admonitions.
    honor_hard_breaks : bool, default True
        Whether a trailing `` +`` on a line produces a hard line break.
    parse_table_spans : bool, default True
        Whether cell span prefixes (``2+|``, ``.3+|``) are recognized.

    """

    attributes: Mapping[str, str] = field(
        default_factory=dict,
        metadata={"help": "Attribute overrides (name -> value)", "importance": "core"},
    )
    attribute_missing_policy: AttributeMissingPolicy = field(
        default=DEFAULT_ASCIIDOC_ATTRIBUTE_MISSING_POLICY,
        metadata={
            "help": "Policy for undefined attribute references: keep literal, use blank, or warn",
            "choices": ["keep", "blank", "warn"],
            "importance": "advanced",
        },
    )
    parse_admonitions: bool = field(
        default=DEFAULT_ASCIIDOC_PARSE_ADMONITIONS,
        metadata={"help": "Parse admonition paragraphs and blocks ([NOTE], TIP:, ...)", "importance": "core"},
    )
    honor_hard_breaks: bool = field(
        default=DEFAULT_ASCIIDOC_HONOR_HARD_BREAKS,
        metadata={"help": "Honor explicit line breaks (trailing space + plus)", "importance": "advanced"},
    )
    parse_table_spans: bool = field(
        default=DEFAULT_ASCIIDOC_PARSE_TABLE_SPANS,
        metadata={"help": "Parse table colspan/rowspan syntax (e.g., 2+|cell)", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If the missing-attribute policy is not recognized.

        """
        if self.attribute_missing_policy not in ("keep", "blank", "warn"):
            raise ValueError(
                f"attribute_missing_policy must be 'keep', 'blank' or 'warn', got {self.attribute_missing_policy!r}"
            )
