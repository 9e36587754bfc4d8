"""adoc2html - Convert AsciiDoc documents to Franklin block-convention HTML.

adoc2html reads an AsciiDoc document into a typed node tree and renders it as
the flat ``<div>`` structures the Franklin site pipeline recognizes as blocks
(tables, admonitions, procedures, include fragments). Node kinds without a
convention rule fall back to generic HTML5 markup.

Key Features
------------
- Self-contained AsciiDoc reader (sections, lists, tables, admonitions,
  delimited blocks, inline markup, attributes)
- Franklin block convention converter with a generic HTML5 fallback
- Link rewriting and include resolution through a pluggable book
- HTTP docs service converting documents fetched from an upstream repository
- Command-line interface (``adoc2html convert`` and ``adoc2html serve``)

Requirements
------------
- Python 3.10+
- beautifulsoup4, httpx, rich, PyYAML

Examples
--------
Convert a topic to a bare HTML fragment:

    >>> from adoc2html import convert
    >>> convert("== Intro\\n\\nHello *world*", topic_path="guide/intro.adoc", plain=True)
    '<div><h2>Intro</h2>\\n<p>Hello <strong>world</strong></p></div>'

Resolve images and includes below a published book:

    >>> from adoc2html import SiteBook
    >>> html = convert(source, topic_path="guide/intro.adoc", book=SiteBook("https://docs.example.com"))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2html/__init__.py

from adoc2html.api import convert, to_ast
from adoc2html.book import Book, SiteBook
from adoc2html.exceptions import (
    Adoc2HtmlError,
    ConfigError,
    FormatError,
    ParsingError,
    RenderingError,
    UpstreamError,
    ValidationError,
)
from adoc2html.options import AsciiDocOptions, ConversionOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "convert",
    "to_ast",
    "Book",
    "SiteBook",
    "AsciiDocOptions",
    "ConversionOptions",
    "Adoc2HtmlError",
    "ConfigError",
    "FormatError",
    "ParsingError",
    "RenderingError",
    "UpstreamError",
    "ValidationError",
]
