#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/blocks.py
"""Builders for Franklin convention blocks.

A convention block is a ``<div>`` whose class names the block (first token)
and its variants (remaining tokens). Its rows are child ``<div>`` elements
and each row holds one ``<div>`` per column.

"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from adoc2html.ast.nodes import Table, TableCell, TableRow, row_widths
from adoc2html.constants import BLOCK_TABLE, VARIANT_HEADLESS
from adoc2html.utils.text import to_class_name

CellRenderer = Callable[[TableCell], str]


def make_block(name: str, content: str, variants: Iterable[str] = (), single_cell: bool = False) -> str:
    """Wrap content in a convention block.

    Parameters
    ----------
    name : str
        Block name, normalized with :func:`~adoc2html.utils.text.to_class_name`
    content : str
        Inner HTML; surrounding whitespace is stripped
    variants : iterable of str, default ()
        Variant names; names that normalize to nothing are dropped
    single_cell : bool, default False
        Wrap the content in one row with one column

    Returns
    -------
    str
        The block HTML

    Examples
    --------
        >>> make_block("Procedure", "<ol></ol>", single_cell=True)
        '<div class="procedure"><div><div><ol></ol></div></div></div>'
        >>> make_block("table", "", ["headless", "--"])
        '<div class="table headless"></div>'

    """
    tokens = [to_class_name(name)]
    tokens.extend(token for token in (to_class_name(variant) for variant in variants) if token)
    body = content.strip()
    if single_cell:
        body = f"<div><div>{body}</div></div>"
    return f'<div class="{" ".join(tokens)}">{body}</div>'


def flatten_rows(rows: Sequence[TableRow], render_cell: CellRenderer, width: int = 0) -> str:
    """Flatten table rows into row and column ``<div>`` elements.

    Rows narrower than ``width`` columns are padded with empty columns.
    Column spans count toward a row's width, and so do columns still held
    by a rowspan from an earlier row.

    """
    flattened: list[str] = []
    for row, occupied in zip(rows, row_widths(list(rows))):
        columns = [f"<div>{render_cell(cell)}</div>" for cell in row]
        missing = width - occupied
        if missing > 0:
            columns.extend(["<div></div>"] * missing)
        flattened.append(f"<div>{''.join(columns)}</div>")
    return "\n".join(flattened)


def table_to_block(table: Table, render_cell: CellRenderer, name: str = BLOCK_TABLE) -> str:
    """Convert a table into a convention block named ``name``.

    Head, body and foot rows are flattened separately and concatenated in
    that order. A table without head rows gets the ``headless`` variant.
    """
    width = table.column_count
    sections = (table.rows.head, table.rows.body, table.rows.foot)
    content = "\n".join(part for part in (flatten_rows(rows, render_cell, width) for rows in sections) if part)
    variants = [VARIANT_HEADLESS] if not table.head_rows else []
    return make_block(name, content, variants)


__all__ = ["CellRenderer", "flatten_rows", "make_block", "table_to_block"]
