"""The exported API functions for AsciiDoc to HTML conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2html/api.py
import logging
from dataclasses import fields
from typing import Any, Mapping, Optional

from adoc2html.ast.nodes import Document, NodeKind
from adoc2html.book import SiteBook
from adoc2html.exceptions import ValidationError
from adoc2html.options.asciidoc import AsciiDocOptions
from adoc2html.options.conversion import ConversionOptions
from adoc2html.parsers.asciidoc import AsciiDocParser
from adoc2html.postprocess import normalize_html
from adoc2html.renderers import create_converter
from adoc2html.utils.timing import debug_timer

logger = logging.getLogger(__name__)

_OPTION_NAMES = frozenset(field.name for field in fields(ConversionOptions))


def _build_options(options: Optional[ConversionOptions], kwargs: Mapping[str, Any]) -> ConversionOptions:
    """Merge keyword shortcuts into conversion options."""
    unknown = sorted(set(kwargs) - _OPTION_NAMES)
    if unknown:
        raise ValidationError(
            f"Unknown conversion option(s): {', '.join(unknown)}",
            parameter_name=unknown[0],
            parameter_value=kwargs[unknown[0]],
        )

    try:
        if options is None:
            return ConversionOptions(**kwargs)
        if kwargs:
            return options.create_updated(**kwargs)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e
    return options


def to_ast(source: str, attributes: Optional[Mapping[str, str]] = None, **kwargs: Any) -> Document:
    """Read AsciiDoc source into a node tree.

    Parameters
    ----------
    source : str
        AsciiDoc text
    attributes : Mapping[str, str], optional
        Attribute overrides applied on top of the document's own entries
    kwargs : Any
        Further :class:`~adoc2html.options.AsciiDocOptions` fields

    Returns
    -------
    Document
        The parsed document

    Examples
    --------
        >>> doc = to_ast("= Guide\\n\\nHello")
        >>> doc.title
        'Guide'

    """
    try:
        reader_options = AsciiDocOptions(attributes=dict(attributes or {}), **kwargs)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e

    with debug_timer(logger, "Parsing (asciidoc)", size=len(source)):
        return AsciiDocParser(reader_options).parse(source)


def convert(source: str, options: Optional[ConversionOptions] = None, **kwargs: Any) -> str:
    """Convert AsciiDoc source to HTML.

    Parameters
    ----------
    source : str
        AsciiDoc text
    options : ConversionOptions, optional
        Conversion options. Keyword arguments override its fields, or build
        the options when it is omitted.
    kwargs : Any
        ``topic_path``, ``backend``, ``attributes``, ``plain``, ``book`` and
        ``html_parser`` shortcuts

    Returns
    -------
    str
        A full HTML page, or the bare fragment when ``plain`` is set

    Raises
    ------
    ValidationError
        If ``topic_path`` is missing or an option value is invalid
    FormatError
        If the backend is unknown

    Examples
    --------
    Convert a topic of a book published at the site root:

        >>> html = convert("NOTE: Read this first.", topic_path="guide/intro.adoc", plain=True)
        >>> html.startswith('<div class="admonition note">')
        True

    With explicit options:

        >>> options = ConversionOptions(topic_path="intro.adoc", book=SiteBook("https://docs.example.com"))
        >>> page = convert(source, options)

    """
    final_options = _build_options(options, kwargs)
    if not final_options.topic_path:
        raise ValidationError(
            "topic_path is required", parameter_name="topic_path", parameter_value=final_options.topic_path
        )

    converter = create_converter(final_options.backend)
    book = final_options.book if final_options.book is not None else SiteBook("")

    document = to_ast(source, attributes=final_options.attributes)

    with debug_timer(logger, f"Rendering ({final_options.backend})"):
        ctx = converter.create_context(book, final_options.topic_path, document)
        html = converter.render(document, ctx, NodeKind.EMBEDDED)

    with debug_timer(logger, "Normalizing HTML", size=len(html)):
        return normalize_html(html, plain=final_options.plain, parser=final_options.html_parser)


__all__ = ["convert", "to_ast"]
