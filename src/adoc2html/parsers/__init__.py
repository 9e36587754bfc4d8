#  Copyright (c) 2025 Tom Villani, Ph.D.
"""AsciiDoc readers: block-level parser and inline markup parser."""

from adoc2html.parsers.asciidoc import AsciiDocLexer, AsciiDocParser, Token, TokenType
from adoc2html.parsers.inline import InlineParser

__all__ = [
    "AsciiDocLexer",
    "AsciiDocParser",
    "InlineParser",
    "Token",
    "TokenType",
]
