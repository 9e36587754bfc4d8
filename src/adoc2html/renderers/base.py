#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/base.py
"""Base converter and conversion context.

Converters turn the node tree into HTML by dispatching on
:class:`~adoc2html.ast.NodeKind`. Each converter builds a read-only table of
per-kind handlers when it is created; nodes without a handler (or whose
handler returns None) are passed to the fallback converter.

All per-conversion state travels in an immutable :class:`RenderContext`
that is handed to every call, so a converter instance can be shared between
threads and a callee can never change what its caller sees.

"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from adoc2html.ast.nodes import Document, Inline, InlineContent, Node, NodeKind, RawHtml
from adoc2html.book import Book
from adoc2html.utils.html_utils import escape_html

logger = logging.getLogger(__name__)

Handler = Callable[[Any, "RenderContext"], Optional[str]]


@dataclass(frozen=True)
class RenderContext:
    """State of one conversion, passed explicitly to every render call.

    Parameters
    ----------
    converter : BaseConverter
        Converter that children are dispatched through
    book : Book
        Site URL resolver
    topic_path : str
        Path of the topic being converted, relative to the book root
    document : Document or None, default None
        Document owning the node currently being rendered
    section_depth : int, default 0
        Number of enclosing sections
    in_section : bool, default False
        Whether rendering happens inside a section

    Notes
    -----
    ``section_depth`` and ``in_section`` are kept up to date by the section
    handlers through :meth:`nested` for handlers that depend on nesting.
    The built-in Franklin and HTML5 rules take heading levels from the
    section nodes and do not read them.

    """

    converter: BaseConverter
    book: Book
    topic_path: str
    document: Optional[Document] = None
    section_depth: int = 0
    in_section: bool = False

    def __post_init__(self) -> None:
        if self.section_depth < 0:
            raise ValueError(f"section_depth must be non-negative, got {self.section_depth}")

    @property
    def topic_dir(self) -> str:
        """Directory containing the topic, relative to the book root."""
        return posixpath.dirname(self.topic_path)

    @property
    def icons_enabled(self) -> bool:
        """True when the document sets the ``icons`` attribute."""
        return self.document is not None and "icons" in self.document.attributes

    def bind(self, node: Any) -> RenderContext:
        """Return a context whose document is the one owning ``node``.

        Detached nodes keep the current document.
        """
        document = getattr(node, "document", None)
        if document is None or document is self.document:
            return self
        return replace(self, document=document)

    def nested(self) -> RenderContext:
        """Return the context for the children of a section."""
        return replace(self, section_depth=self.section_depth + 1, in_section=True)


class BaseConverter:
    """Dispatch nodes to per-kind handlers.

    Subclasses register their handlers in :meth:`_build_handlers`. The
    resulting table is frozen for the lifetime of the converter.

    Parameters
    ----------
    fallback : BaseConverter or None, default None
        Converter used for kinds without a handler here

    """

    #: Backend name used in log messages
    backend_name = "base"

    def __init__(self, fallback: BaseConverter | None = None):
        """Initialize the converter and freeze its handler table."""
        self._handlers: Mapping[NodeKind, Handler] = MappingProxyType(dict(self._build_handlers()))
        self.fallback = fallback

    def _build_handlers(self) -> Mapping[NodeKind, Handler]:
        """Return the per-kind handler table of this converter."""
        return {}

    @property
    def handlers(self) -> Mapping[NodeKind, Handler]:
        """Read-only mapping of node kinds to handlers."""
        return self._handlers

    def create_context(self, book: Book, topic_path: str, document: Document | None = None) -> RenderContext:
        """Create the root context of a conversion with this converter."""
        return RenderContext(converter=self, book=book, topic_path=topic_path, document=document)

    def render(self, node: Any, ctx: RenderContext, kind: Union[NodeKind, str, None] = None) -> str:
        """Render ``node`` to HTML.

        Parameters
        ----------
        node : Node
            Node to render
        ctx : RenderContext
            Conversion context of the caller
        kind : NodeKind, str or None, default None
            Kind to render the node as, instead of its own kind

        Returns
        -------
        str
            HTML for the node

        """
        transform = NodeKind(kind) if kind is not None else None
        name = transform or node.kind
        logger.debug("convert node: transform=%s name=%s", transform and transform.value, name.value)

        ctx = ctx.bind(node)
        content = self.handle(node, ctx, name)
        if content is not None:
            return content

        if self.fallback is None:
            logger.warning("No %s handler for node kind %r, dropping it", self.backend_name, name.value)
            return ""

        logger.warning("handling node with %s converter: %s", self.fallback.backend_name, name.value)
        content = self.fallback.handle(node, ctx, name)
        logger.debug("handled node with %s converter: %s %r", self.fallback.backend_name, name.value, content)
        return content or ""

    def handle(self, node: Any, ctx: RenderContext, kind: NodeKind) -> Optional[str]:
        """Run this converter's own handler for ``kind``, if it has one."""
        handler = self._handlers.get(kind)
        if handler is None:
            return None
        return handler(node, ctx)

    # ------------------------------------------------------------------
    # Helpers shared by handlers
    # ------------------------------------------------------------------

    @staticmethod
    def render_inlines(content: InlineContent, ctx: RenderContext) -> str:
        """Render inline content: text is escaped, inline nodes are dispatched."""
        parts: list[str] = []
        for item in content:
            if isinstance(item, Inline):
                parts.append(ctx.converter.render(item, ctx))
            elif isinstance(item, RawHtml):
                parts.append(str(item))
            else:
                parts.append(escape_html(item))
        return "".join(parts)

    @staticmethod
    def render_blocks(blocks: Iterable[Node], ctx: RenderContext, separator: str = "\n") -> str:
        """Render child blocks through the context's converter."""
        return separator.join(ctx.converter.render(block, ctx) for block in blocks)


__all__ = ["BaseConverter", "Handler", "RenderContext"]
