#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/franklin.py
"""Franklin block convention converter.

This module provides the FranklinConverter class, which renders a subset of
node kinds as the flat ``<div>`` structures the Franklin site pipeline
recognizes as blocks: tables, admonitions, procedures and include fragments.
Every other kind is delegated to
:class:`~adoc2html.renderers.html5.Html5Converter`, whose output still has
its children rendered by this converter.

"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

from adoc2html.ast.nodes import (
    Block,
    DescriptionList,
    Document,
    Inline,
    List,
    ListItem,
    NodeKind,
    Section,
    Table,
    TableCell,
    plain_text,
)
from adoc2html.constants import BLOCK_FRAGMENT, BLOCK_PROCEDURE, INCLUDE_ROLE, PROCEDURE_ROLE
from adoc2html.renderers.base import BaseConverter, Handler, RenderContext
from adoc2html.renderers.blocks import make_block, table_to_block
from adoc2html.renderers.html5 import Html5Converter
from adoc2html.utils.html_utils import escape_attr, escape_html, html_attrs
from adoc2html.utils.links import resolve_image_source, resolve_include, rewrite_link_target
from adoc2html.utils.text import to_class_name

logger = logging.getLogger(__name__)

_QUOTED_TAGS = {
    "strong": "strong",
    "monospaced": "code",
    "emphasis": "em",
}


class FranklinConverter(BaseConverter):
    """Render nodes following the Franklin block convention.

    Parameters
    ----------
    fallback : BaseConverter or None, default None
        Converter for kinds without a convention rule. A fresh
        :class:`Html5Converter` is used when omitted.

    Examples
    --------
        >>> from adoc2html.ast.nodes import Block, NodeKind
        >>> from adoc2html.book import SiteBook
        >>> converter = FranklinConverter()
        >>> ctx = converter.create_context(SiteBook(""), "guide/intro.adoc")
        >>> converter.render(Block(NodeKind.THEMATIC_BREAK), ctx)
        '<hr>'

    """

    backend_name = "franklin"

    def __init__(self, fallback: BaseConverter | None = None):
        """Initialize the converter with its fallback."""
        super().__init__(fallback=fallback if fallback is not None else Html5Converter())

    def _build_handlers(self) -> Mapping[NodeKind, Handler]:
        return {
            NodeKind.EMBEDDED: self.render_embedded,
            NodeKind.SECTION: self.render_section,
            NodeKind.PARAGRAPH: self.render_paragraph,
            NodeKind.ADMONITION: self.render_admonition,
            NodeKind.LITERAL: self.render_literal,
            NodeKind.LISTING: self.render_literal,
            NodeKind.INLINE_QUOTED: self.render_inline_quoted,
            NodeKind.INLINE_ANCHOR: self.render_inline_anchor,
            NodeKind.ULIST: self.render_list,
            NodeKind.OLIST: self.render_list,
            NodeKind.DLIST: self.render_dlist,
            NodeKind.LIST_ITEM: self.render_list_item,
            NodeKind.IMAGE: self.render_image,
            NodeKind.TABLE: self.render_table,
            NodeKind.THEMATIC_BREAK: self.render_thematic_break,
            NodeKind.FLOATING_TITLE: self.render_floating_title,
        }

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def render_embedded(self, node: Document, ctx: RenderContext) -> str:
        """Render the document body without page chrome."""
        return self.render_blocks(node.blocks, ctx)

    def render_section(self, node: Section, ctx: RenderContext) -> str:
        """Render a section as a flat run of ``<div>`` panes.

        The first pane holds the heading and the section's own blocks. Every
        subsection contributes its panes after it; blocks that follow a
        subsection join the most recent pane. Nesting depth therefore never
        shows up as nested ``<div>`` elements.
        """
        panes = ["\n".join(pane) for pane in self._section_panes(node, ctx)]
        return "".join(f"<div>{pane}</div>" for pane in panes)

    def _section_panes(self, node: Section, ctx: RenderContext) -> list[list[str]]:
        child_ctx = ctx.nested()
        tag = f"h{node.level + 1}"
        title = self.render_inlines(node.title_inlines, ctx)

        panes: list[list[str]] = [[f"<{tag}>{title}</{tag}>"] if title else []]
        for block in node.blocks:
            if isinstance(block, Section):
                panes.extend(self._section_panes(block, child_ctx))
            else:
                panes[-1].append(child_ctx.converter.render(block, child_ctx))
        return panes

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def render_paragraph(self, node: Block, ctx: RenderContext) -> str:
        """Render a paragraph."""
        return f"<p>{self.render_inlines(node.inlines, ctx)}</p>"

    def render_admonition(self, node: Block, ctx: RenderContext) -> str:
        """Render an admonition as a single-cell block named after its style."""
        style = (node.style or "").lower()
        title = self.render_inlines(node.title_inlines, ctx).strip()
        heading = f"<h6>{title}</h6>\n" if title else ""

        if node.blocks:
            content = self.render_blocks(node.blocks, ctx)
        else:
            content = self.render_inlines(node.inlines, ctx)

        return f'<div class="admonition {style}"><div><div>{heading}{content}</div></div></div>'

    def render_literal(self, node: Block, ctx: RenderContext) -> str:
        """Render literal and listing blocks as preformatted code."""
        source = escape_html(node.source).replace("\t", " ")
        return f"<pre><code>{source}</code></pre>"

    def render_thematic_break(self, node: Block, ctx: RenderContext) -> str:
        """Render a thematic break."""
        return "<hr>"

    def render_floating_title(self, node: Block, ctx: RenderContext) -> str:
        """Floating titles have no convention equivalent and are dropped."""
        logger.error("Floating titles are not supported by the franklin backend: %r", node.title)
        return ""

    def render_image(self, node: Block, ctx: RenderContext) -> str:
        """Render a block image below the site's graphics directory."""
        target = node.attr("target")
        if not target:
            return ""

        src = resolve_image_source(target, ctx.book)
        return f"<img{html_attrs(src=src, alt=node.attr('alt', ''), width=node.attr('width'))}>"

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def render_list(self, node: List, ctx: RenderContext) -> str:
        """Render ordered and unordered lists; procedures become blocks."""
        tag = "ol" if node.kind == NodeKind.OLIST else "ul"
        content = self.render_blocks(node.items, ctx, separator="")
        html = f"<{tag}>{content}</{tag}>" if content else ""

        if node.kind == NodeKind.OLIST and node.has_role(PROCEDURE_ROLE):
            return make_block(BLOCK_PROCEDURE, html, single_cell=True)
        return html

    def render_list_item(self, node: ListItem, ctx: RenderContext) -> str:
        """Render a list item, its text as a paragraph followed by its blocks."""
        text = self.render_inlines(node.inlines, ctx)
        content = self.render_blocks(node.blocks, ctx, separator="")
        if not text and not content:
            return ""

        paragraph = f"<p>{text}</p>" if text else ""
        return f"<li>{paragraph}{content}</li>"

    def render_dlist(self, node: DescriptionList, ctx: RenderContext) -> str:
        """Render a description list as a two-column grid block."""
        rows = "".join(
            "<div>" + "".join(f"<div>{self._render_dlist_column(column, ctx)}</div>" for column in row) + "</div>"
            for row in node.rows
        )
        return f'<div class="dlist">{rows}</div>'

    def _render_dlist_column(self, column: Union[list[ListItem], ListItem, None], ctx: RenderContext) -> str:
        if column is None:
            return ""
        if isinstance(column, list):
            return "".join(self._render_dlist_column(item, ctx) for item in column)

        item_ctx = ctx.bind(column)
        text = f"<p>{self.render_inlines(column.inlines, item_ctx)}</p>" if column.inlines else ""
        return text + self.render_blocks(column.blocks, item_ctx, separator="")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def render_table(self, node: Table, ctx: RenderContext) -> str:
        """Render a table as a convention block.

        A titled table without header rows becomes a block named after its
        title; any other table becomes a ``table`` block.
        """

        def render_cell(cell: TableCell) -> str:
            return self._render_cell(cell, ctx)

        title = node.title or plain_text(node.title_inlines)
        if title and not node.head_rows and to_class_name(title):
            return table_to_block(node, render_cell, name=title)

        return table_to_block(node, render_cell)

    def _render_cell(self, cell: TableCell, ctx: RenderContext) -> str:
        if cell.is_asciidoc:
            return self.render_blocks(cell.blocks, ctx)
        return self.render_inlines(cell.inlines, ctx)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def render_inline_quoted(self, node: Inline, ctx: RenderContext) -> str:
        """Render strong, emphasis and monospaced text; other spans lose their markup."""
        content = self.render_inlines(node.inlines, ctx)
        tag = _QUOTED_TAGS.get(node.type)
        if tag is None:
            logger.warning("[inline_quoted] unhandled span type: %s", node.type)
            return content
        return f"<{tag}>{content}</{tag}>"

    def render_inline_anchor(self, node: Inline, ctx: RenderContext) -> str:
        """Render links and cross references; include references become fragment blocks."""
        text = self._anchor_text(node, ctx)

        if node.role == INCLUDE_ROLE:
            href, variants = resolve_include(node.target, ctx.topic_path, ctx.book)
            return make_block(BLOCK_FRAGMENT, f'<a href="{escape_attr(href)}">{text}</a>', variants, single_cell=True)

        href = rewrite_link_target(node.target)
        return f'<a href="{escape_attr(href)}">{text}</a>'

    def _anchor_text(self, node: Inline, ctx: RenderContext) -> str:
        if node.inlines:
            return self.render_inlines(node.inlines, ctx)
        if node.type == "xref":
            return escape_html(self._reference_text(node, ctx))
        return escape_html(node.target)

    @staticmethod
    def _reference_text(node: Inline, ctx: RenderContext) -> str:
        refid = node.attr("refid") or node.target.lstrip("#")
        text: Optional[str] = None
        if ctx.document is not None and "path" not in node.attributes:
            text = ctx.document.reference_text(refid)
        return text or f"[{refid}]"


__all__ = ["FranklinConverter"]
