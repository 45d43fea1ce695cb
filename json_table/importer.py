"""Entry points that turn JSON into display-ready table rows.

:func:`flatten_to_table` is the pure core: a parsed JSON value in, a list of
rows out. The ``import_json*`` functions wrap it with loading and never raise
for the known failure modes; instead they return the fixed error table
``[["Error"], [message]]`` so a grid always has something to show.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Tuple, Union

from .errors import JsonTableError
from .fetch import DEFAULT_TIMEOUT_SECONDS, fetch_json, load_json_file, load_json_text
from .flattener import DEFAULT_MAX_DEPTH, IncludeFunc, flatten_document
from .options import Options, format_options, parse_options
from .query import QueryFilter, QueryInput, build_filter, describe_query
from .table import TableRows, assemble_table, drop_header_row
from .transform import TransformFunc, transform_table

logger = logging.getLogger(__name__)

ERROR_HEADER = "Error"

OptionsInput = Union[str, Options, None]
Fetcher = Callable[..., Any]


def flatten_to_table(
    value: Any,
    query: Union[QueryInput, QueryFilter] = None,
    options: OptionsInput = None,
    *,
    segment_match: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include: Optional[IncludeFunc] = None,
    transform: Optional[TransformFunc] = None,
) -> TableRows:
    """Convert a parsed JSON value into rows of cells.

    Parameters
    ----------
    value : Any
        Any JSON value (object, array, scalar or None).
    query : str | Sequence[str] | QueryFilter | None, optional
        Path prefixes to keep, e.g. ``"/name,/location"``. Empty keeps all.
    options : str | Options | None, optional
        Formatting flags, e.g. ``"noTruncate,rawHeaders"``.
    segment_match : bool, optional
        Match query prefixes only on ``/`` boundaries (default: False).
    max_depth : int, optional
        Maximum container nesting before :class:`DepthExceeded` is raised.
    include : callable, optional
        ``include(path, query_filter) -> bool`` replacing the prefix test.
    transform : callable, optional
        ``transform(rows, row, column, options)`` replacing the default
        per-cell pipeline.

    Returns
    -------
    TableRows
        Header row first (unless ``noHeaders`` drops it), then one row per
        record.

    Raises
    ------
    InputError
        If ``query`` or ``options`` has the wrong type.
    DepthExceeded
        If ``value`` nests deeper than ``max_depth``.

    Examples
    --------
    >>> flatten_to_table({"x": [1, 2, 3]})
    [['X'], ['1, 2, 3']]
    """
    parsed_options = parse_options(options)
    query_filter = build_filter(query, segment_match=segment_match)

    context = flatten_document(value, query_filter, max_depth=max_depth, include=include)
    logger.debug(
        "Flattened into %d column(s) and %d row(s) (query=%r, options=%r)",
        len(context.columns),
        context.row_count,
        describe_query(query_filter),
        format_options(parsed_options),
    )

    rows = assemble_table(context)
    transform_table(rows, parsed_options, transform)
    return drop_header_row(rows, parsed_options)


def error_table(message: Any) -> TableRows:
    """Return the two-row table shown in place of data on failure."""
    return [[ERROR_HEADER], [str(message)]]


def load_table(
    load: Callable[[], Any],
    query: Union[QueryInput, QueryFilter] = None,
    options: OptionsInput = None,
    **table_kwargs: Any,
) -> Tuple[TableRows, bool]:
    """Call ``load`` and flatten its result, reporting whether it failed.

    Returns
    -------
    Tuple[TableRows, bool]
        The rows and ``False``, or :func:`error_table` rows and ``True`` when
        loading or flattening raised a :class:`JsonTableError`.
    """
    try:
        return flatten_to_table(load(), query, options, **table_kwargs), False
    except JsonTableError as exc:
        logger.warning("Import failed: %s", exc)
        return error_table(exc), True


def _guarded(load: Callable[[], Any], query: Any, options: Any, **table_kwargs: Any) -> TableRows:
    rows, _ = load_table(load, query, options, **table_kwargs)
    return rows


def import_json(
    url: str,
    query: Union[QueryInput, QueryFilter] = None,
    options: OptionsInput = None,
    *,
    payload: Union[str, bytes, Mapping[str, Any], None] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    fetcher: Fetcher = fetch_json,
    segment_match: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
    include: Optional[IncludeFunc] = None,
    transform: Optional[TransformFunc] = None,
) -> TableRows:
    """Fetch JSON from ``url`` and flatten it.

    A ``payload`` turns the request into a POST. Fetch, parse and depth
    failures come back as :func:`error_table` rows.
    """
    return _guarded(
        lambda: fetcher(url, payload=payload, headers=headers, timeout=timeout),
        query,
        options,
        segment_match=segment_match,
        max_depth=max_depth,
        include=include,
        transform=transform,
    )


def import_json_text(
    text: Union[str, bytes, None],
    query: Union[QueryInput, QueryFilter] = None,
    options: OptionsInput = None,
    **table_kwargs: Any,
) -> TableRows:
    """Flatten a JSON document held in a string (for example a sheet cell)."""
    return _guarded(lambda: load_json_text(text), query, options, **table_kwargs)


def import_json_file(
    path: Union[Path, str],
    query: Union[QueryInput, QueryFilter] = None,
    options: OptionsInput = None,
    **table_kwargs: Any,
) -> TableRows:
    """Flatten a local JSON file."""
    return _guarded(lambda: load_json_file(path), query, options, **table_kwargs)
