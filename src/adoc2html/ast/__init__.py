#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/ast/__init__.py
"""Node tree produced by the AsciiDoc reader and consumed by the converters."""

from adoc2html.ast.nodes import (
    Block,
    DescriptionEntry,
    DescriptionList,
    Document,
    Inline,
    InlineContent,
    InlineItem,
    List,
    ListItem,
    Node,
    NodeKind,
    RawHtml,
    Section,
    Table,
    TableCell,
    TableRow,
    TableRows,
    iter_sections,
    plain_text,
)

__all__ = [
    "Block",
    "DescriptionEntry",
    "DescriptionList",
    "Document",
    "Inline",
    "InlineContent",
    "InlineItem",
    "List",
    "ListItem",
    "Node",
    "NodeKind",
    "RawHtml",
    "Section",
    "Table",
    "TableCell",
    "TableRow",
    "TableRows",
    "iter_sections",
    "plain_text",
]
