"""Path-prefix filtering of flattened fields.

A query is a list of path prefixes (``/location,/name``). A scalar path is
kept when it starts with any of them. Matching is a plain string-prefix test
by default, so the query ``/a`` also keeps ``/ab``; pass
``segment_match=True`` to only accept matches that end on a ``/`` boundary.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Union

from .errors import InputError

QueryInput = Union[str, Sequence[str], None]


def parse_query(query: QueryInput = None) -> List[str]:
    """Normalize a query into an ordered list of prefixes.

    Parameters
    ----------
    query : str | Sequence[str] | None, optional
        Comma-separated prefixes or an already split sequence.

    Returns
    -------
    List[str]
        Trimmed prefixes, empty entries removed, original order kept.

    Examples
    --------
    >>> parse_query(" /name, ,/location ")
    ['/name', '/location']
    """
    if not query:
        return []
    if isinstance(query, str):
        entries: Iterable[str] = query.split(",")
    elif isinstance(query, (list, tuple)):
        entries = query
    else:
        raise InputError(f"Query must be a string or a list of paths, got {type(query).__name__}")
    paths = []
    for entry in entries:
        if not isinstance(entry, str):
            raise InputError(f"Query paths must be strings, got {entry!r}")
        if entry.strip():
            paths.append(entry.strip())
    return paths


def _segment_prefix(path: str, entry: str) -> bool:
    if path == entry:
        return True
    prefix = entry if entry.endswith("/") else entry + "/"
    return path.startswith(prefix)


class QueryFilter:
    """Inclusion predicate built from query prefixes."""

    def __init__(self, query: QueryInput = None, segment_match: bool = False) -> None:
        self.paths: List[str] = parse_query(query)
        self.segment_match = segment_match

    def include(self, path: str) -> bool:
        """Return True when ``path`` should produce a column."""
        if not self.paths:
            return True
        if self.segment_match:
            return any(_segment_prefix(path, entry) for entry in self.paths)
        return any(path.startswith(entry) for entry in self.paths)

    def __repr__(self) -> str:
        mode = "segment" if self.segment_match else "prefix"
        return f"QueryFilter({self.paths!r}, mode={mode})"


def build_filter(query: Union[QueryInput, QueryFilter], segment_match: bool = False) -> QueryFilter:
    """Return ``query`` as a :class:`QueryFilter`, building one when needed."""
    if isinstance(query, QueryFilter):
        return query
    return QueryFilter(query, segment_match=segment_match)


def describe_query(query: Optional[QueryFilter]) -> str:
    return ",".join(query.paths) if query is not None else ""
