#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/ast/nodes.py
"""Node classes for parsed AsciiDoc documents.

The AsciiDoc reader produces a tree of these nodes and the HTML converters
consume it. Every node carries a :class:`NodeKind` tag, which is what the
converters dispatch on, so several source constructs that render differently
(paragraphs, listings, admonitions, ...) share the :class:`Block` class and
differ only in their kind.

Node Hierarchy
--------------
Structural nodes:
    - Document, Section, Block
    - List, ListItem, DescriptionList
    - Table (with TableCell rows)

Inline nodes:
    - Inline (quoted text, anchors, inline images, hard breaks)
    - RawHtml (passthrough text emitted without escaping)

Inline content is a plain Python list mixing ``str`` (unescaped text),
:class:`RawHtml` and :class:`Inline` nodes.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional, Union


class NodeKind(str, Enum):
    """Kind tag of a node, used as the dispatch key by the converters."""

    DOCUMENT = "document"
    EMBEDDED = "embedded"
    SECTION = "section"
    PARAGRAPH = "paragraph"
    ULIST = "ulist"
    OLIST = "olist"
    DLIST = "dlist"
    LIST_ITEM = "list_item"
    TABLE = "table"
    IMAGE = "image"
    ADMONITION = "admonition"
    LITERAL = "literal"
    LISTING = "listing"
    THEMATIC_BREAK = "thematic_break"
    PAGE_BREAK = "page_break"
    FLOATING_TITLE = "floating_title"
    QUOTE = "quote"
    SIDEBAR = "sidebar"
    EXAMPLE = "example"
    PASS = "pass"
    OUTLINE = "outline"
    INLINE_QUOTED = "inline_quoted"
    INLINE_ANCHOR = "inline_anchor"
    INLINE_IMAGE = "inline_image"
    INLINE_BREAK = "inline_break"


class RawHtml(str):
    """Inline text that is emitted verbatim, without HTML escaping."""

    __slots__ = ()


InlineItem = Union[str, "Inline"]
InlineContent = list[InlineItem]


def plain_text(content: InlineContent) -> str:
    """Return the text of inline content with all markup removed.

    Examples
    --------
        >>> plain_text(["Use ", Inline(NodeKind.INLINE_QUOTED, type="strong", inlines=["care"])])
        'Use care'

    """
    parts: list[str] = []
    for item in content:
        if isinstance(item, Inline):
            if item.kind == NodeKind.INLINE_BREAK:
                parts.append(" ")
            else:
                parts.append(plain_text(item.inlines))
        else:
            parts.append(str(item))
    return "".join(parts)


def _adopt(parent: Any, content: InlineContent) -> None:
    for item in content:
        if isinstance(item, Inline):
            item.parent = parent


@dataclass(eq=False)
class Node:
    """Base class for all nodes.

    Parameters
    ----------
    kind : NodeKind
        What this node represents
    attributes : dict[str, str], default = empty dict
        Free-form attributes (``id``, ``role``, ``options``, ...)
    blocks : list of Node, default = empty list
        Ordered child blocks
    parent : Node or None, default = None
        Containing node, set automatically when a child is attached

    """

    kind: NodeKind
    attributes: dict[str, str] = field(default_factory=dict)
    blocks: list[Node] = field(default_factory=list)
    parent: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Attach constructor-supplied children to this node."""
        for block in self.blocks:
            block.parent = self

    @property
    def node_name(self) -> str:
        """Kind of the node as a string."""
        return self.kind.value

    @property
    def document(self) -> Optional[Document]:
        """The document this node belongs to, or None when detached."""
        node: Any = self
        while node is not None:
            if isinstance(node, Document):
                return node
            node = node.parent
        return None

    @property
    def id(self) -> Optional[str]:
        """Element ID assigned in the source, if any."""
        return self.attributes.get("id")

    @property
    def role(self) -> Optional[str]:
        """The full role attribute (space-separated role names)."""
        return self.attributes.get("role")

    @property
    def roles(self) -> list[str]:
        """Individual role names."""
        return (self.role or "").split()

    def has_role(self, name: str) -> bool:
        """Return True when ``name`` is one of the node's roles."""
        return name in self.roles

    def attr(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Look up an attribute, returning ``default`` when it is not set."""
        return self.attributes.get(name, default)

    def has_option(self, name: str) -> bool:
        """Return True when ``name`` appears in the node's options."""
        return name in self.attributes.get("options", "").replace(",", " ").split()

    def append(self, block: Node) -> Node:
        """Attach ``block`` as the last child and return it."""
        block.parent = self
        self.blocks.append(block)
        return block


@dataclass(eq=False)
class Block(Node):
    """A block-level node without list or table structure.

    Used for paragraphs, admonitions, literal/listing/passthrough content,
    compound blocks (quote, sidebar, example), images, breaks, floating
    titles and the ``toc::[]`` outline.

    Parameters
    ----------
    title : str or None, default = None
        Block title (``.Title`` line), plain text
    title_inlines : InlineContent, default = empty list
        Block title with inline markup parsed
    style : str or None, default = None
        Block style (e.g. ``NOTE`` for admonitions, ``source`` for listings)
    inlines : InlineContent, default = empty list
        Inline content of paragraphs and paragraph-form admonitions
    source : str, default = ""
        Verbatim content of literal, listing and passthrough blocks
    level : int, default = 0
        Heading level of floating titles

    """

    kind: NodeKind = NodeKind.PARAGRAPH
    title: Optional[str] = None
    title_inlines: InlineContent = field(default_factory=list)
    style: Optional[str] = None
    inlines: InlineContent = field(default_factory=list)
    source: str = ""
    level: int = 0

    def __post_init__(self) -> None:
        """Attach children and inline content to this block."""
        super().__post_init__()
        _adopt(self, self.inlines)
        _adopt(self, self.title_inlines)

    @property
    def text(self) -> str:
        """Plain text of the inline content."""
        return plain_text(self.inlines)


@dataclass(eq=False)
class Section(Node):
    """A section heading and the blocks below it.

    Parameters
    ----------
    level : int, default = 1
        Section level; ``==`` is level 1, a ``=`` heading after the
        document header is level 0
    title : str, default = ""
        Section title, plain text
    title_inlines : InlineContent, default = empty list
        Section title with inline markup parsed

    """

    kind: NodeKind = NodeKind.SECTION
    level: int = 1
    title: str = ""
    title_inlines: InlineContent = field(default_factory=list)

    def __post_init__(self) -> None:
        """Attach children and title content to this section."""
        super().__post_init__()
        _adopt(self, self.title_inlines)


@dataclass(eq=False)
class Document(Node):
    """Root of a parsed document.

    Parameters
    ----------
    title : str or None, default = None
        Document title from the ``=`` header line
    title_inlines : InlineContent, default = empty list
        Document title with inline markup parsed
    catalog : dict[str, Node], default = empty dict
        Nodes that carry an ID, for cross reference text lookup

    """

    kind: NodeKind = NodeKind.DOCUMENT
    title: Optional[str] = None
    title_inlines: InlineContent = field(default_factory=list)
    catalog: dict[str, Node] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        """Attach children and title content to the document."""
        super().__post_init__()
        _adopt(self, self.title_inlines)

    def reference_text(self, refid: str) -> Optional[str]:
        """Return the title of the node registered under ``refid``."""
        node = self.catalog.get(refid)
        if node is None:
            return None
        return getattr(node, "title", None) or None

    def sections(self) -> Iterator[Section]:
        """Iterate over all sections in document order."""
        yield from iter_sections(self)


@dataclass(eq=False)
class ListItem(Node):
    """An entry of an ordered, unordered or description list.

    Parameters
    ----------
    inlines : InlineContent, default = empty list
        The item's principal text
    marker : str, default = ""
        The list marker used in the source (``*``, ``.``, ``::``)

    """

    kind: NodeKind = NodeKind.LIST_ITEM
    inlines: InlineContent = field(default_factory=list)
    marker: str = ""

    def __post_init__(self) -> None:
        """Attach children and text content to the item."""
        super().__post_init__()
        _adopt(self, self.inlines)

    @property
    def text(self) -> str:
        """Plain text of the principal text."""
        return plain_text(self.inlines)


@dataclass(eq=False)
class List(Node):
    """An ordered or unordered list; items are the child blocks.

    Parameters
    ----------
    title : str or None, default = None
        Block title, plain text
    style : str or None, default = None
        Numbering style for ordered lists (``arabic``, ``loweralpha``, ...)

    """

    kind: NodeKind = NodeKind.ULIST
    title: Optional[str] = None
    style: Optional[str] = None

    @property
    def items(self) -> list[ListItem]:
        """The list items."""
        return [block for block in self.blocks if isinstance(block, ListItem)]


@dataclass(eq=False)
class DescriptionEntry:
    """One row of a description list: its terms and optional description."""

    terms: list[ListItem]
    description: Optional[ListItem] = None


@dataclass(eq=False)
class DescriptionList(Node):
    """A description list (``term:: description``).

    Parameters
    ----------
    entries : list of DescriptionEntry, default = empty list
        Rows of the list; an entry may have several terms
    title : str or None, default = None
        Block title, plain text

    """

    kind: NodeKind = NodeKind.DLIST
    entries: list[DescriptionEntry] = field(default_factory=list)
    title: Optional[str] = None

    def __post_init__(self) -> None:
        """Attach terms and descriptions to the list."""
        super().__post_init__()
        for entry in self.entries:
            self.adopt_entry(entry)

    def adopt_entry(self, entry: DescriptionEntry) -> DescriptionEntry:
        """Attach the items of ``entry`` to this list and return it."""
        for term in entry.terms:
            term.parent = self
        if entry.description is not None:
            entry.description.parent = self
        return entry

    @property
    def rows(self) -> list[list[Union[list[ListItem], Optional[ListItem]]]]:
        """Entries as ``[terms, description]`` pairs."""
        return [[entry.terms, entry.description] for entry in self.entries]


@dataclass(eq=False)
class TableCell:
    """A table cell.

    Parameters
    ----------
    inlines : InlineContent, default = empty list
        Content of simple cells
    blocks : list of Node, default = empty list
        Content of AsciiDoc (``a|``) cells
    style : str or None, default = None
        Cell style (``a`` for AsciiDoc, ``h`` for header, ...)
    colspan : int, default = 1
        Number of columns spanned
    rowspan : int, default = 1
        Number of rows spanned

    """

    inlines: InlineContent = field(default_factory=list)
    blocks: list[Node] = field(default_factory=list)
    style: Optional[str] = None
    colspan: int = 1
    rowspan: int = 1
    parent: Optional[Any] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Attach content to the cell."""
        for block in self.blocks:
            block.parent = self
        _adopt(self, self.inlines)

    @property
    def is_asciidoc(self) -> bool:
        """True for cells whose content is parsed as nested blocks."""
        return self.style == "a"

    @property
    def text(self) -> str:
        """Plain text of a simple cell."""
        return plain_text(self.inlines)


TableRow = list[TableCell]


def row_widths(rows: list[TableRow]) -> list[int]:
    """Columns occupied by each row, including columns held by rowspans from earlier rows.

    Examples
    --------
        >>> rows = [[TableCell(rowspan=2), TableCell()], [TableCell()]]
        >>> row_widths(rows)
        [2, 2]

    """
    widths: list[int] = []
    carried: list[int] = []
    for row in rows:
        held = carried.pop(0) if carried else 0
        widths.append(held + sum(cell.colspan for cell in row))
        for cell in row:
            for offset in range(cell.rowspan - 1):
                while len(carried) <= offset:
                    carried.append(0)
                carried[offset] += cell.colspan
    return widths


@dataclass(eq=False)
class TableRows:
    """Rows of a table, split into head, body and foot sections."""

    head: list[TableRow] = field(default_factory=list)
    body: list[TableRow] = field(default_factory=list)
    foot: list[TableRow] = field(default_factory=list)

    def all_rows(self) -> list[TableRow]:
        """Return head, body and foot rows in order."""
        return [*self.head, *self.body, *self.foot]


@dataclass(eq=False)
class Table(Node):
    """A table.

    Parameters
    ----------
    rows : TableRows, default = empty rows
        Head, body and foot rows
    title : str or None, default = None
        Table title, plain text
    title_inlines : InlineContent, default = empty list
        Table title with inline markup parsed

    """

    kind: NodeKind = NodeKind.TABLE
    rows: TableRows = field(default_factory=TableRows)
    title: Optional[str] = None
    title_inlines: InlineContent = field(default_factory=list)

    def __post_init__(self) -> None:
        """Attach cells and title content to the table."""
        super().__post_init__()
        for row in self.rows.all_rows():
            for cell in row:
                cell.parent = self
        _adopt(self, self.title_inlines)

    @property
    def head_rows(self) -> list[TableRow]:
        """Header rows."""
        return self.rows.head

    @property
    def column_count(self) -> int:
        """Width of the widest row, counting column and row spans."""
        return max(row_widths(self.rows.all_rows()), default=0)


@dataclass(eq=False)
class Inline(Node):
    """An inline node.

    Parameters
    ----------
    type : str, default = ""
        Sub-type: ``strong``, ``emphasis``, ``monospaced``, ``mark``,
        ``superscript``, ``subscript`` for quoted text; ``link``, ``xref``
        for anchors
    target : str, default = ""
        Link target or image source
    inlines : InlineContent, default = empty list
        Nested inline content (quoted text, link text)

    """

    kind: NodeKind = NodeKind.INLINE_QUOTED
    type: str = ""
    target: str = ""
    inlines: InlineContent = field(default_factory=list)

    def __post_init__(self) -> None:
        """Attach nested inline content."""
        super().__post_init__()
        _adopt(self, self.inlines)

    @property
    def text(self) -> str:
        """Plain text of the nested content."""
        return plain_text(self.inlines)


def iter_sections(node: Node) -> Iterator[Section]:
    """Iterate over the sections below ``node`` in document order."""
    for block in node.blocks:
        if isinstance(block, Section):
            yield block
            yield from iter_sections(block)


__all__ = [
    "NodeKind",
    "RawHtml",
    "InlineItem",
    "InlineContent",
    "plain_text",
    "Node",
    "Block",
    "Section",
    "Document",
    "ListItem",
    "List",
    "DescriptionEntry",
    "DescriptionList",
    "TableCell",
    "TableRow",
    "TableRows",
    "Table",
    "Inline",
    "iter_sections",
    "row_widths",
]
