"""Test utilities for the adoc2html test suite.

This module provides a recording book double, render-context helpers and
small HTML inspection helpers shared by unit and integration tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup

from adoc2html.ast.nodes import Document
from adoc2html.renderers.base import BaseConverter, RenderContext


@dataclass
class RecordingBook:
    """Book double that records every path it resolves.

    Resolves ``path`` to ``https://book.test/<path>`` so tests can tell
    book-resolved URLs apart from rewritten link targets.
    """

    base: str = "https://book.test"
    calls: list[str] = field(default_factory=list)

    def resolve(self, path: str) -> str:
        self.calls.append(path)
        return f"{self.base}/{path.lstrip('/')}"


def make_context(
    converter: BaseConverter,
    book: RecordingBook | None = None,
    topic_path: str = "guide/intro.adoc",
    document: Document | None = None,
) -> RenderContext:
    """Create a root render context for ``converter``."""
    return converter.create_context(book or RecordingBook(), topic_path, document)


def soup_of(html: str) -> BeautifulSoup:
    """Parse converted HTML for structural assertions."""
    return BeautifulSoup(html, "html.parser")
