"""Core JSON flattening into a sparse table.

This module walks an arbitrary JSON value depth-first and spreads its
scalars over a table. Every scalar is addressed by a slash-delimited path
(``/location/city``); each distinct path becomes one column, numbered in the
order it is first met. Arrays of objects become repeated rows that share
those columns, while arrays of scalars collapse into a single
comma-separated cell.

All traversal state lives on a :class:`TraversalContext` that is created per
document and passed down the recursion.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from .errors import DepthExceeded
from .query import QueryFilter

DEFAULT_MAX_DEPTH = 256
LIST_SEPARATOR = ", "
PATH_SEPARATOR = "/"
# Integral floats at or above this print in exponent form, as in JSON text.
EXPONENT_THRESHOLD = 1e21

IncludeFunc = Callable[[str, QueryFilter], bool]


def is_object(value: Any) -> bool:
    """Return True for JSON objects (mappings)."""
    return isinstance(value, Mapping)


def is_array(value: Any) -> bool:
    """Return True for JSON arrays."""
    return isinstance(value, (list, tuple))


def scalar_text(value: Any) -> str:
    """Render a JSON scalar the way JSON text spells it.

    ``None`` becomes an empty string, booleans become ``true``/``false``
    and integral floats below 1e21 drop their ``.0``; larger ones keep the
    exponent form (``1e+300``).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < EXPONENT_THRESHOLD:
            return str(int(value))
        return repr(value)
    return str(value)


@dataclass
class TraversalContext:
    """Mutable state shared by one flattening pass.

    Attributes
    ----------
    query : QueryFilter
        Decides which scalar paths become columns.
    max_depth : int
        Maximum number of nested containers before :class:`DepthExceeded`.
    include : IncludeFunc | None
        Optional replacement for ``query.include``; receives the path and the
        query filter.
    columns : Dict[str, int]
        Path -> column index, in discovery order. Entries are never removed or
        renumbered.
    rows : List[Dict[int, Any]]
        Sparse rows. Row 0 is reserved for the header row.
    cursor : int
        Index of the row currently being filled.
    """
    query: QueryFilter = field(default_factory=QueryFilter)
    max_depth: int = DEFAULT_MAX_DEPTH
    include: Optional[IncludeFunc] = None
    columns: Dict[str, int] = field(default_factory=dict)
    rows: List[Dict[int, Any]] = field(default_factory=lambda: [{}])
    cursor: int = 1

    def includes(self, path: str) -> bool:
        if self.include is not None:
            return bool(self.include(path, self.query))
        return self.query.include(path)

    def column_of(self, path: str) -> int:
        """Return the column for ``path``, allocating the next one if unseen."""
        index = self.columns.get(path)
        if index is None:
            index = len(self.columns)
            self.columns[path] = index
        return index

    def insert(self, path: str, value: Any) -> None:
        column = self.column_of(path)
        while len(self.rows) <= self.cursor:
            self.rows.append({})
        self.rows[self.cursor][column] = value

    def row_has_values(self) -> bool:
        return self.cursor < len(self.rows) and bool(self.rows[self.cursor])

    @property
    def row_count(self) -> int:
        """Number of data rows populated so far (header excluded)."""
        return len(self.rows) - 1


def child_path(path: str, key: Any) -> str:
    """Extend ``path`` with an object key.

    >>> child_path("", "location")
    '/location'
    >>> child_path("/location", "city")
    '/location/city'
    """
    return f"{path}{PATH_SEPARATOR}{key}"


def flatten(context: TraversalContext, path: str, value: Any, depth: int = 0) -> bool:
    """Flatten ``value`` found at ``path`` into ``context``.

    Parameters
    ----------
    context : TraversalContext
        Shared traversal state; mutated in place.
    path : str
        Path of ``value`` (empty string for the document root).
    value : Any
        Parsed JSON value.
    depth : int, optional
        Number of containers enclosing ``value``.

    Returns
    -------
    bool
        True if at least one cell was written.

    Raises
    ------
    DepthExceeded
        If containers nest deeper than ``context.max_depth``.
    """
    if is_object(value):
        _check_depth(context, path, depth)
        inserted = False
        for key, item in value.items():
            if flatten(context, child_path(path, key), item, depth + 1):
                inserted = True
        return inserted

    if is_array(value):
        if not value:
            return False
        _check_depth(context, path, depth)
        if any(is_object(item) for item in value):
            return _flatten_repeating(context, path, value, depth)
        return _insert_scalar(context, path, _join_scalars(context, path, value, depth))

    return _insert_scalar(context, path, value)


def _check_depth(context: TraversalContext, path: str, depth: int) -> None:
    if depth >= context.max_depth:
        raise DepthExceeded(context.max_depth, path)


def _insert_scalar(context: TraversalContext, path: str, value: Any) -> bool:
    if not context.includes(path):
        return False
    context.insert(path, value)
    return True


def _join_scalars(context: TraversalContext, path: str, items: Any, depth: int) -> str:
    parts = []
    for item in items:
        if is_array(item):
            _check_depth(context, path, depth + 1)
            parts.append(_join_scalars(context, path, item, depth + 1))
        elif is_object(item):
            _check_nesting(context, path, item, depth + 1)
            parts.append(json.dumps(item, ensure_ascii=False))
        else:
            parts.append(scalar_text(item))
    return LIST_SEPARATOR.join(parts)


def _check_nesting(context: TraversalContext, path: str, value: Any, depth: int) -> None:
    # Objects embedded in a joined cell are serialized whole; bound them first.
    if is_object(value):
        children = value.values()
    elif is_array(value):
        children = value
    else:
        return
    _check_depth(context, path, depth)
    for child in children:
        _check_nesting(context, path, child, depth + 1)


def _flatten_repeating(context: TraversalContext, path: str, items: Any, depth: int) -> bool:
    # Elements share the array's path; each element that wrote something
    # closes its row so the next one starts fresh.
    inserted = False
    for item in items:
        if flatten(context, path, item, depth + 1):
            inserted = True
            if context.row_has_values():
                context.cursor += 1
    return inserted


def flatten_document(
    value: Any,
    query: Optional[QueryFilter] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include: Optional[IncludeFunc] = None,
) -> TraversalContext:
    """Flatten a whole JSON document and return the populated context."""
    context = TraversalContext(
        query=query if query is not None else QueryFilter(),
        max_depth=max_depth,
        include=include,
    )
    flatten(context, "", value)
    return context
