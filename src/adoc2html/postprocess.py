#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/postprocess.py
"""Final normalization of converted HTML.

The converters produce an HTML string; this pass parses it once with
BeautifulSoup, wraps top-level lists in a ``<div>`` (the site pipeline only
recognizes ``<div>`` children of the page as content sections) and places
the fragment in the page scaffold unless a plain fragment is requested.

"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, FeatureNotFound, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from adoc2html.constants import (
    DEFAULT_HTML_PARSER,
    PAGE_SCRIPT_SRC,
    PAGE_STYLESHEET_HREF,
    PAGE_VIEWPORT,
    HtmlParser,
)
from adoc2html.exceptions import RenderingError

logger = logging.getLogger(__name__)

WRAPPED_ELEMENTS = frozenset({"ol", "ul"})


class SourceOrderFormatter(HTMLFormatter):
    """Serialize HTML5 keeping attributes in source order.

    Only ``&``, ``<`` and ``>`` are escaped, void elements are written without
    a closing slash and empty attribute values are kept.
    """

    def __init__(self) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml, void_element_close_prefix=None)

    def attributes(self, tag: Tag):  # type: ignore[override]
        return list(tag.attrs.items()) if tag.attrs else []


FORMATTER = SourceOrderFormatter()

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta name="viewport" content="{viewport}">
    <script src="{script}" type="module"></script>
    <link rel="stylesheet" href="{stylesheet}">
    <link rel="icon" href="data:,">
  </head>
  <body>
    <header></header>
    <main>
{content}
    </main>
    <footer></footer>
  </body>
</html>"""


def _fragment_root(soup: BeautifulSoup) -> Tag:
    """Return the element holding the parsed fragment's top-level nodes.

    ``html.parser`` keeps a fragment as is; ``html5lib`` and ``lxml`` build
    a full document around it.
    """
    if soup.body is not None:
        return soup.body
    return soup


def wrap_root_lists(root: Tag, soup: BeautifulSoup) -> int:
    """Wrap every top-level ``<ol>``/``<ul>`` of ``root`` in a ``<div>``.

    Returns
    -------
    int
        Number of lists wrapped

    """
    wrapped = 0
    for child in list(root.children):
        if isinstance(child, Tag) and child.name in WRAPPED_ELEMENTS:
            child.wrap(soup.new_tag("div"))
            wrapped += 1
    return wrapped


def render_page(fragment: str) -> str:
    """Place an HTML fragment in the full page scaffold."""
    return PAGE_TEMPLATE.format(
        viewport=PAGE_VIEWPORT,
        script=PAGE_SCRIPT_SRC,
        stylesheet=PAGE_STYLESHEET_HREF,
        content=fragment,
    )


def normalize_html(html: str, plain: bool = False, parser: HtmlParser = DEFAULT_HTML_PARSER) -> str:
    """Normalize converted HTML and optionally wrap it in the page scaffold.

    Parameters
    ----------
    html : str
        HTML produced by a converter
    plain : bool, default False
        Return the bare fragment instead of a full page
    parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder

    Returns
    -------
    str
        The normalized fragment or full page

    Raises
    ------
    RenderingError
        If the requested tree builder is not installed

    """
    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise RenderingError(
            f"Cannot parse converted HTML with {parser!r}: {e}",
            rendering_stage="postprocess",
            original_error=e,
        ) from e

    root = _fragment_root(soup)
    wrapped = wrap_root_lists(root, soup)
    if wrapped:
        logger.debug("Wrapped %d top-level list(s) in <div>", wrapped)

    fragment = root.decode_contents(formatter=FORMATTER)
    return fragment if plain else render_page(fragment)


__all__ = ["normalize_html", "render_page", "wrap_root_lists"]
