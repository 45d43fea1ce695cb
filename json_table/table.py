"""Turn a populated traversal context into dense rows."""

from __future__ import annotations

from typing import Any, List

from .flattener import TraversalContext
from .options import Options

Row = List[Any]
TableRows = List[Row]


def header_row(context: TraversalContext) -> Row:
    """Return the raw paths laid out by column index."""
    headers: Row = [None] * len(context.columns)
    for path, index in context.columns.items():
        headers[index] = path
    return headers


def assemble_table(context: TraversalContext) -> TableRows:
    """Materialize the sparse rows into a rectangular table.

    Row 0 holds the raw paths; every data row is padded with ``None`` to the
    number of discovered columns.
    """
    width = len(context.columns)
    table: TableRows = [header_row(context)]
    for sparse in context.rows[1:]:
        row: Row = [None] * width
        for column, value in sparse.items():
            row[column] = value
        table.append(row)
    return table


def drop_header_row(rows: TableRows, options: Options) -> TableRows:
    """Remove the header row when ``no_headers`` is set and data rows exist."""
    if options.no_headers and len(rows) > 1:
        return rows[1:]
    return rows
