#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/book.py
"""Site URL resolution for documents in a book.

A *book* is the collection of topics published together. Renderers never
build site URLs themselves: image sources and cross-document references are
passed to :meth:`Book.resolve`, which maps a path relative to the book root
to the URL the page should link to.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class Book(Protocol):
    """Map document-relative paths to absolute site URLs."""

    def resolve(self, path: str) -> str:
        """Return the site URL for ``path`` (relative to the book root)."""
        ...


def normalize_book_path(path: str) -> str:
    """Normalize a book path to a site-absolute path.

    Duplicate and leading slashes are collapsed, ``.`` segments dropped and
    ``..`` segments resolved; ``..`` never climbs above the root.

    Examples
    --------
        >>> normalize_book_path("guide/./sub")
        '/guide/sub'
        >>> normalize_book_path("//_graphics/../img.png")
        '/img.png'

    """
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return "/" + "/".join(segments)


@dataclass(frozen=True)
class SiteBook:
    """Book published under a base URL.

    Parameters
    ----------
    base_url : str
        Scheme and host (optionally a path prefix) the site is served from.
        An empty string produces site-absolute paths.
    root_path : str, default ""
        Path of the book below ``base_url``

    Examples
    --------
        >>> SiteBook("https://docs.example.com", "product").resolve("guide/sub")
        'https://docs.example.com/product/guide/sub'
        >>> SiteBook("").resolve("/_graphics/arch.png")
        '/_graphics/arch.png'

    """

    base_url: str = ""
    root_path: str = ""

    def resolve(self, path: str) -> str:
        """Return the URL of ``path`` inside this book."""
        site_path = normalize_book_path(f"{self.root_path}/{path}")
        return f"{self.base_url.rstrip('/')}{site_path}"


__all__ = ["Book", "SiteBook", "normalize_book_path"]
