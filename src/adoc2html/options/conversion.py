#  Copyright (c) 2025 Tom Villani, Ph.D.

# adoc2html/options/conversion.py
"""Options for a single AsciiDoc to HTML conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from adoc2html.book import Book
from adoc2html.constants import DEFAULT_BACKEND, DEFAULT_HTML_PARSER, DEFAULT_PLAIN, HtmlParser
from adoc2html.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Configuration for :func:`adoc2html.api.convert`.

    Parameters
    ----------
    topic_path : str
        Path of the topic being converted, relative to the book root
        (e.g. ``guide/intro.adoc``). Required: relative includes are resolved
        against its directory.
    backend : str, default "franklin"
        Renderer set to use. ``"franklin"`` applies the block convention,
        ``"html5"`` (alias ``"html"``) produces generic HTML5.
    attributes : Mapping[str, str], default empty
        Attribute overrides forwarded to the AsciiDoc reader.
    plain : bool, default False
        Emit a bare HTML fragment instead of a full page.
    book : Book or None, default None
        Site URL resolver. ``None`` resolves to site-absolute paths.
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup parser used by the final normalization pass.

    """

    topic_path: str = field(
        default="",
        metadata={"help": "Topic path relative to the book root (required)", "importance": "core"},
    )
    backend: str = field(
        default=DEFAULT_BACKEND,
        metadata={"help": "Renderer backend", "choices": ["franklin", "html5", "html"], "importance": "core"},
    )
    attributes: Mapping[str, str] = field(
        default_factory=dict,
        metadata={"help": "Attribute overrides (name -> value)", "importance": "core"},
    )
    plain: bool = field(
        default=DEFAULT_PLAIN,
        metadata={"help": "Emit a bare HTML fragment instead of a full page", "importance": "core"},
    )
    book: Optional[Book] = field(
        default=None,
        compare=False,
        metadata={"help": "Site URL resolver for images and includes", "importance": "advanced"},
    )
    html_parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={
            "help": "BeautifulSoup parser used for the final normalization pass",
            "choices": ["html.parser", "html5lib", "lxml"],
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If an attribute name or value is not a string, or the HTML parser
            is not recognized.

        """
        for name, value in self.attributes.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise ValueError(f"attributes must map strings to strings, got {name!r}: {value!r}")
        if self.html_parser not in ("html.parser", "html5lib", "lxml"):
            raise ValueError(f"html_parser must be 'html.parser', 'html5lib' or 'lxml', got {self.html_parser!r}")
