#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/utils/links.py
"""Link target and image source rewriting.

Pure functions that turn link targets and image sources found in AsciiDoc
into the URLs the site pipeline expects. Site-absolute paths come from a
:class:`~adoc2html.book.Book`, which is the only collaborator involved.

Rules for link targets, applied in order:

1. the convention suffix ``.franklin`` is stripped;
2. absolute URLs get their hostname lowercased and runs of three or more
   hyphens collapsed to two (in the host and the path); anything that does
   not parse as an absolute URL is left untouched;
3. include references additionally drop the ``.adoc`` extension and, unless
   they already point at an ``http(s)`` URL, are resolved through the book
   relative to the directory of the topic being converted.

"""

from __future__ import annotations

import logging
import posixpath
import re
from urllib.parse import urlsplit, urlunsplit

from adoc2html.book import Book
from adoc2html.constants import ADOC_SUFFIX, FRANKLIN_SUFFIX, GRAPHICS_PATH, VARIANT_DOCS, VARIANT_INCLUDE

logger = logging.getLogger(__name__)

_HYPHEN_RUN = re.compile(r"-{3,}")
_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)


def strip_suffix(target: str, suffix: str) -> str:
    """Remove ``suffix`` from the end of ``target`` if present."""
    if suffix and target.endswith(suffix):
        return target[: -len(suffix)]
    return target


def collapse_hyphens(text: str) -> str:
    """Collapse every run of three or more hyphens to exactly two."""
    return _HYPHEN_RUN.sub("--", text)


def normalize_hostname(hostname: str) -> str:
    """Normalize a hostname for the site's link convention.

    Idempotent: normalizing an already normalized hostname returns it
    unchanged.

    Examples
    --------
        >>> normalize_hostname("Main---Docs.Example.com")
        'main--docs.example.com'

    """
    return collapse_hyphens(hostname).lower()


def normalize_url(target: str) -> str:
    """Normalize an absolute URL, leaving anything else unchanged.

    Parameters
    ----------
    target : str
        Link target as written in the source

    Returns
    -------
    str
        The normalized URL, or ``target`` itself when it is relative or
        cannot be parsed

    """
    try:
        parts = urlsplit(target)
        # Raises ValueError for malformed ports
        parts.port
    except ValueError:
        logger.debug("Link target is not a valid URL, keeping it verbatim: %s", target)
        return target

    if not parts.scheme or not parts.netloc:
        return target

    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{normalize_hostname(hostport)}"
    return urlunsplit((parts.scheme, netloc, collapse_hyphens(parts.path), parts.query, parts.fragment))


def rewrite_link_target(target: str) -> str:
    """Apply the suffix and URL rules shared by links and includes."""
    if not target:
        return target
    return normalize_url(strip_suffix(target, FRANKLIN_SUFFIX))


def is_http_url(target: str) -> bool:
    """Return True when ``target`` is an absolute ``http`` or ``https`` URL."""
    return bool(_HTTP_URL.match(target))


def topic_directory(topic_path: str) -> str:
    """Return the directory containing a topic, relative to the book root.

    Examples
    --------
        >>> topic_directory("guide/intro.adoc")
        'guide'
        >>> topic_directory("intro.adoc")
        ''

    """
    return posixpath.dirname(topic_path)


def resolve_include(target: str, topic_path: str, book: Book) -> tuple[str, list[str]]:
    """Resolve an include reference to its href and block variants.

    Parameters
    ----------
    target : str
        Include target as written in the source (e.g. ``./sub.adoc``)
    topic_path : str
        Path of the topic being converted, relative to the book root
    book : Book
        Site URL resolver

    Returns
    -------
    tuple[str, list[str]]
        The href and the variants of the fragment block

    Examples
    --------
        >>> resolve_include("./sub.adoc", "guide/intro.adoc", SiteBook(""))
        ('/guide/sub', ['include', 'docs'])

    """
    variants = [VARIANT_INCLUDE]
    href = strip_suffix(rewrite_link_target(target), ADOC_SUFFIX)

    if not is_http_url(href):
        relative = posixpath.normpath(posixpath.join(topic_directory(topic_path), href))
        href = book.resolve(relative)
        variants.append(VARIANT_DOCS)

    return href, variants


def resolve_image_source(target: str, book: Book) -> str:
    """Resolve a block image target below the site's graphics directory."""
    return book.resolve(f"{GRAPHICS_PATH}{target}")


__all__ = [
    "strip_suffix",
    "collapse_hyphens",
    "normalize_hostname",
    "normalize_url",
    "rewrite_link_target",
    "is_http_url",
    "topic_directory",
    "resolve_include",
    "resolve_image_source",
]
