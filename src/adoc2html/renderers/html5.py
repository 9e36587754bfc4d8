#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/html5.py
"""Generic HTML5 converter.

This module provides the Html5Converter class which renders every node kind
as the semantic HTML5 markup AsciiDoc processors produce (``div.paragraph``,
``div.sect1``, ``div.ulist``, ``table.tableblock``, ...). It is both the
``html5`` backend and the fallback of the Franklin convention converter.

"""

from __future__ import annotations

import logging
from typing import Mapping

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
    TableRow,
)
from adoc2html.renderers.base import BaseConverter, Handler, RenderContext
from adoc2html.utils.html_utils import escape_html, html_attrs

logger = logging.getLogger(__name__)

_QUOTED_TAGS = {
    "strong": "strong",
    "emphasis": "em",
    "monospaced": "code",
    "mark": "mark",
    "superscript": "sup",
    "subscript": "sub",
}


def _prefixed(html: str) -> str:
    return f"\n{html}" if html else ""


class Html5Converter(BaseConverter):
    """Render every node kind as generic HTML5.

    Examples
    --------
        >>> from adoc2html.ast.nodes import Block, NodeKind
        >>> from adoc2html.book import SiteBook
        >>> converter = Html5Converter()
        >>> ctx = converter.create_context(SiteBook(""), "intro.adoc")
        >>> converter.render(Block(NodeKind.PARAGRAPH, inlines=["Hi"]), ctx)
        '<div class="paragraph">\\n<p>Hi</p>\\n</div>'

    """

    backend_name = "html5"

    def _build_handlers(self) -> Mapping[NodeKind, Handler]:
        return {
            NodeKind.DOCUMENT: self.render_document,
            NodeKind.EMBEDDED: self.render_embedded,
            NodeKind.SECTION: self.render_section,
            NodeKind.PARAGRAPH: self.render_paragraph,
            NodeKind.ULIST: self.render_ulist,
            NodeKind.OLIST: self.render_olist,
            NodeKind.DLIST: self.render_dlist,
            NodeKind.LIST_ITEM: self.render_list_item,
            NodeKind.TABLE: self.render_table,
            NodeKind.IMAGE: self.render_image,
            NodeKind.ADMONITION: self.render_admonition,
            NodeKind.LITERAL: self.render_literal,
            NodeKind.LISTING: self.render_listing,
            NodeKind.THEMATIC_BREAK: self.render_thematic_break,
            NodeKind.PAGE_BREAK: self.render_page_break,
            NodeKind.FLOATING_TITLE: self.render_floating_title,
            NodeKind.QUOTE: self.render_quote,
            NodeKind.SIDEBAR: self.render_sidebar,
            NodeKind.EXAMPLE: self.render_example,
            NodeKind.PASS: self.render_pass,
            NodeKind.OUTLINE: self.render_outline,
            NodeKind.INLINE_QUOTED: self.render_inline_quoted,
            NodeKind.INLINE_ANCHOR: self.render_inline_anchor,
            NodeKind.INLINE_IMAGE: self.render_inline_image,
            NodeKind.INLINE_BREAK: self.render_inline_break,
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _classes(*names: str | None) -> str:
        return " ".join(name for name in names if name)

    def _title(self, node: Block | List | DescriptionList | Table, ctx: RenderContext) -> str:
        title_inlines = getattr(node, "title_inlines", None)
        if title_inlines:
            return f'<div class="title">{self.render_inlines(title_inlines, ctx)}</div>\n'
        if node.title:
            return f'<div class="title">{escape_html(node.title)}</div>\n'
        return ""

    def _wrap(self, node: Block, ctx: RenderContext, block_class: str, inner: str) -> str:
        attrs = html_attrs(id=node.id, class_=self._classes(block_class, node.role))
        return f"<div{attrs}>\n{self._title(node, ctx)}{inner}\n</div>"

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def render_document(self, node: Document, ctx: RenderContext) -> str:
        """Render the document title followed by its body."""
        header = ""
        if node.title_inlines:
            header = f'<div id="header">\n<h1>{self.render_inlines(node.title_inlines, ctx)}</h1>\n</div>\n'
        return f'{header}<div id="content">\n{self.render_embedded(node, ctx)}\n</div>'

    def render_embedded(self, node: Document, ctx: RenderContext) -> str:
        """Render the document body; the title only when ``showtitle`` is set."""
        body = self.render_blocks(node.blocks, ctx)
        if node.title_inlines and "showtitle" in node.attributes:
            return f"<h1>{self.render_inlines(node.title_inlines, ctx)}</h1>\n{body}"
        return body

    def render_section(self, node: Section, ctx: RenderContext) -> str:
        """Render a section with its heading and nested content."""
        level = node.level
        tag = f"h{min(level + 1, 6)}"
        title = self.render_inlines(node.title_inlines, ctx)
        body = self.render_blocks(node.blocks, ctx.nested())
        heading = f"<{tag}{html_attrs(id=node.id)}>{title}</{tag}>"

        if level == 1:
            body = f'<div class="sectionbody">\n{body}\n</div>'
        attrs = html_attrs(class_=self._classes(f"sect{level}", node.role))
        return f"<div{attrs}>\n{heading}\n{body}\n</div>"

    def render_floating_title(self, node: Block, ctx: RenderContext) -> str:
        """Render a discrete heading."""
        tag = f"h{min(node.level + 1, 6)}"
        attrs = html_attrs(id=node.id, class_=self._classes("discrete", node.role))
        return f"<{tag}{attrs}>{self.render_inlines(node.title_inlines, ctx)}</{tag}>"

    def render_outline(self, node: Block, ctx: RenderContext) -> str:
        """Render a table of contents for the owning document."""
        document = ctx.document
        if document is None:
            return ""
        try:
            max_level = int(document.attr("toclevels", "2") or 2)
        except ValueError:
            max_level = 2
        entries = self._outline_entries(list(document.blocks), ctx, 1, max_level)
        if not entries:
            return ""
        title = escape_html(document.attr("toc-title", "Table of Contents") or "")
        return f'<div id="toc" class="toc">\n<div id="toctitle">{title}</div>\n{entries}\n</div>'

    def _outline_entries(self, blocks: list, ctx: RenderContext, depth: int, max_level: int) -> str:
        sections = [block for block in blocks if isinstance(block, Section)]
        if not sections or depth > max_level:
            return ""
        items = []
        for section in sections:
            title = self.render_inlines(section.title_inlines, ctx)
            nested = self._outline_entries(list(section.blocks), ctx, depth + 1, max_level)
            items.append(f'<li><a href="#{section.id}">{title}</a>{_prefixed(nested)}</li>')
        return f'<ul class="sectlevel{depth}">\n' + "\n".join(items) + "\n</ul>"

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def render_paragraph(self, node: Block, ctx: RenderContext) -> str:
        """Render a paragraph."""
        return self._wrap(node, ctx, "paragraph", f"<p>{self.render_inlines(node.inlines, ctx)}</p>")

    def render_admonition(self, node: Block, ctx: RenderContext) -> str:
        """Render an admonition as a two-cell table (icon and content)."""
        name = node.attr("name") or (node.style or "note").lower()
        label = node.attr("textlabel") or name.capitalize()
        if ctx.icons_enabled:
            icon = f'<i class="fa icon-{name}" title="{escape_html(label)}"></i>'
        else:
            icon = f'<div class="title">{escape_html(label)}</div>'

        if node.blocks:
            content = self.render_blocks(node.blocks, ctx)
        else:
            content = self.render_inlines(node.inlines, ctx)

        attrs = html_attrs(id=node.id, class_=self._classes("admonitionblock", name, node.role))
        return (
            f"<div{attrs}>\n<table>\n<tr>\n"
            f'<td class="icon">\n{icon}\n</td>\n'
            f'<td class="content">\n{self._title(node, ctx)}{content}\n</td>\n'
            "</tr>\n</table>\n</div>"
        )

    def render_literal(self, node: Block, ctx: RenderContext) -> str:
        """Render a literal block."""
        inner = f'<div class="content">\n<pre>{escape_html(node.source)}</pre>\n</div>'
        return self._wrap(node, ctx, "literalblock", inner)

    def render_listing(self, node: Block, ctx: RenderContext) -> str:
        """Render a listing block, marking up the source language when known."""
        language = node.attr("language")
        source = escape_html(node.source)
        if language:
            code = f'<code{html_attrs(class_=f"language-{language}", data_lang=language)}>{source}</code>'
            pre = f'<pre class="highlight">{code}</pre>'
        else:
            pre = f"<pre>{source}</pre>"
        return self._wrap(node, ctx, "listingblock", f'<div class="content">\n{pre}\n</div>')

    def render_pass(self, node: Block, ctx: RenderContext) -> str:
        """Emit passthrough content verbatim."""
        return node.source

    def render_thematic_break(self, node: Block, ctx: RenderContext) -> str:
        """Render a thematic break."""
        return "<hr>"

    def render_page_break(self, node: Block, ctx: RenderContext) -> str:
        """Render a page break."""
        return '<div style="page-break-after: always;"></div>'

    def render_image(self, node: Block, ctx: RenderContext) -> str:
        """Render a block image."""
        target = node.attr("target")
        if not target:
            return ""
        img_attrs = html_attrs(
            src=target,
            alt=node.attr("alt", ""),
            width=node.attr("width"),
            height=node.attr("height"),
        )
        img = f"<img{img_attrs}>"
        attrs = html_attrs(id=node.id, class_=self._classes("imageblock", node.role))
        title = self._title(node, ctx)
        return f'<div{attrs}>\n<div class="content">\n{img}\n</div>\n{title}</div>'

    def render_quote(self, node: Block, ctx: RenderContext) -> str:
        """Render a quote block with its optional attribution."""
        if node.blocks:
            content = self.render_blocks(node.blocks, ctx)
        else:
            content = self.render_inlines(node.inlines, ctx)

        attribution = ""
        author = node.attr("attribution")
        cite = node.attr("citetitle")
        if author or cite:
            parts = []
            if author:
                parts.append(f"&#8212; {escape_html(author)}")
            if cite:
                parts.append(f"<cite>{escape_html(cite)}</cite>")
            attribution = f'\n<div class="attribution">\n{"<br>".join(parts)}\n</div>'

        return self._wrap(node, ctx, "quoteblock", f"<blockquote>\n{content}\n</blockquote>{attribution}")

    def render_sidebar(self, node: Block, ctx: RenderContext) -> str:
        """Render a sidebar block."""
        attrs = html_attrs(id=node.id, class_=self._classes("sidebarblock", node.role))
        body = self.render_blocks(node.blocks, ctx)
        return f'<div{attrs}>\n<div class="content">\n{self._title(node, ctx)}{body}\n</div>\n</div>'

    def render_example(self, node: Block, ctx: RenderContext) -> str:
        """Render an example block."""
        inner = f'<div class="content">\n{self.render_blocks(node.blocks, ctx)}\n</div>'
        return self._wrap(node, ctx, "exampleblock", inner)

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def render_ulist(self, node: List, ctx: RenderContext) -> str:
        """Render an unordered list."""
        items = self.render_blocks(node.items, ctx)
        attrs = html_attrs(id=node.id, class_=self._classes("ulist", node.role))
        return f"<div{attrs}>\n{self._title(node, ctx)}<ul>\n{items}\n</ul>\n</div>"

    def render_olist(self, node: List, ctx: RenderContext) -> str:
        """Render an ordered list with its numbering style."""
        items = self.render_blocks(node.items, ctx)
        style = node.style or "arabic"
        attrs = html_attrs(id=node.id, class_=self._classes("olist", style, node.role))
        ol_attrs = html_attrs(class_=style, start=node.attr("start"))
        return f"<div{attrs}>\n{self._title(node, ctx)}<ol{ol_attrs}>\n{items}\n</ol>\n</div>"

    def render_list_item(self, node: ListItem, ctx: RenderContext) -> str:
        """Render a list item."""
        text = f"<p>{self.render_inlines(node.inlines, ctx)}</p>" if node.inlines else ""
        blocks = self.render_blocks(node.blocks, ctx)
        return f"<li>\n{text}{_prefixed(blocks)}\n</li>"

    def render_dlist(self, node: DescriptionList, ctx: RenderContext) -> str:
        """Render a description list."""
        parts: list[str] = []
        for entry in node.entries:
            for term in entry.terms:
                parts.append(f'<dt class="hdlist1">{self.render_inlines(term.inlines, ctx)}</dt>')
            if entry.description is not None:
                description = entry.description
                text = f"<p>{self.render_inlines(description.inlines, ctx)}</p>" if description.inlines else ""
                blocks = self.render_blocks(description.blocks, ctx)
                parts.append(f"<dd>\n{text}{_prefixed(blocks)}\n</dd>")
        attrs = html_attrs(id=node.id, class_=self._classes("dlist", node.role))
        body = "\n".join(parts)
        return f"<div{attrs}>\n{self._title(node, ctx)}<dl>\n{body}\n</dl>\n</div>"

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def render_table(self, node: Table, ctx: RenderContext) -> str:
        """Render a table with head, body and foot sections."""
        attrs = html_attrs(id=node.id, class_=self._classes("tableblock", "frame-all", "grid-all", node.role))
        parts = [f"<table{attrs}>"]
        if node.title_inlines or node.title:
            caption = self.render_inlines(node.title_inlines, ctx) or escape_html(node.title or "")
            parts.append(f'<caption class="title">{caption}</caption>')

        for tag, rows, cell_tag in (
            ("thead", node.rows.head, "th"),
            ("tbody", node.rows.body, "td"),
            ("tfoot", node.rows.foot, "td"),
        ):
            if rows:
                parts.append(f"<{tag}>")
                parts.extend(self._render_row(row, cell_tag, ctx) for row in rows)
                parts.append(f"</{tag}>")

        parts.append("</table>")
        return "\n".join(parts)

    def _render_row(self, row: TableRow, cell_tag: str, ctx: RenderContext) -> str:
        cells = "\n".join(self._render_cell(cell, cell_tag, ctx) for cell in row)
        return f"<tr>\n{cells}\n</tr>"

    def _render_cell(self, cell: TableCell, cell_tag: str, ctx: RenderContext) -> str:
        tag = "th" if cell.style == "h" else cell_tag
        attrs = html_attrs(
            class_="tableblock halign-left valign-top",
            colspan=str(cell.colspan) if cell.colspan > 1 else None,
            rowspan=str(cell.rowspan) if cell.rowspan > 1 else None,
        )
        if cell.is_asciidoc:
            content = f'<div class="content">{self.render_blocks(cell.blocks, ctx)}</div>'
        elif tag == "th":
            content = self.render_inlines(cell.inlines, ctx)
        elif cell.style in ("l", "m"):
            content = f'<div class="literal"><pre>{escape_html(cell.text)}</pre></div>'
        else:
            content = f'<p class="tableblock">{self.render_inlines(cell.inlines, ctx)}</p>'
        return f"<{tag}{attrs}>{content}</{tag}>"

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def render_inline_quoted(self, node: Inline, ctx: RenderContext) -> str:
        """Render quoted text; role spans become ``<span>`` elements."""
        content = self.render_inlines(node.inlines, ctx)
        tag = _QUOTED_TAGS.get(node.type)
        if tag is None:
            if node.role:
                return f"<span{html_attrs(class_=node.role)}>{content}</span>"
            return content
        return f"<{tag}{html_attrs(class_=node.role)}>{content}</{tag}>"

    def render_inline_anchor(self, node: Inline, ctx: RenderContext) -> str:
        """Render links and cross references."""
        if node.inlines:
            text = self.render_inlines(node.inlines, ctx)
        elif node.type == "xref":
            refid = node.attr("refid") or node.target.lstrip("#")
            reference = ctx.document.reference_text(refid) if ctx.document is not None else None
            text = escape_html(reference or f"[{refid}]")
        else:
            text = escape_html(node.target)

        window = node.attr("window")
        attrs = html_attrs(
            href=node.target,
            class_=node.role,
            target=window,
            rel="noopener" if window == "_blank" else None,
        )
        return f"<a{attrs}>{text}</a>"

    def render_inline_image(self, node: Inline, ctx: RenderContext) -> str:
        """Render an inline image."""
        img = html_attrs(
            src=node.target,
            alt=node.attr("alt", ""),
            width=node.attr("width"),
            height=node.attr("height"),
        )
        return f'<span{html_attrs(class_=self._classes("image", node.role))}><img{img}></span>'

    def render_inline_break(self, node: Inline, ctx: RenderContext) -> str:
        """Render a hard line break."""
        return "<br>"


__all__ = ["Html5Converter"]
