"""Per-cell post-processing of an assembled table.

Each cell goes through a fixed pipeline:

1. empty cells become ``""`` and are left alone afterwards;
2. header cells lose the prefix shared by all headers and are humanized
   (``/formatted_address`` -> ``Formatted Address``) unless ``raw_headers``;
3. values are stringified and cut to :data:`MAX_CELL_LENGTH` characters
   unless ``no_truncate``;
4. with ``debug_location`` every value is prefixed with ``[row,col]``.
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Optional, Sequence

from .flattener import scalar_text
from .options import Options
from .table import TableRows

MAX_CELL_LENGTH = 256

TransformFunc = Callable[[TableRows, int, int, Options], None]

_HEADER_SEPARATORS = re.compile(r"[/_]")


def common_prefix_length(headers: Sequence[Any]) -> int:
    """Return the length of the leading text shared by every header.

    Adjacent headers are compared left to right and the candidate length only
    shrinks. Any empty header makes the result 0.

    >>> common_prefix_length(["/person/name", "/person/age"])
    8
    """
    if len(headers) < 2:
        return 0
    length = len(headers[0]) if headers[0] else 0
    for previous, current in zip(headers, headers[1:]):
        if not previous or not current:
            return 0
        limit = min(length, len(previous), len(current))
        length = limit
        for index in range(limit):
            if previous[index] != current[index]:
                length = index
                break
        if length == 0:
            return 0
    return length


def strip_common_prefix(headers: List[Any]) -> int:
    """Remove the shared prefix from every header in place; return its length."""
    length = common_prefix_length(headers)
    if length > 0:
        headers[:] = [header[length:] for header in headers]
    return length


def humanize_header(text: str) -> str:
    """Turn a raw path into a column title.

    ``/`` and ``_`` become spaces and each word is title-cased.

    >>> humanize_header("/formatted_address")
    'Formatted Address'
    """
    words = _HEADER_SEPARATORS.sub(" ", text).split()
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


def default_transform(rows: TableRows, row: int, column: int, options: Options) -> None:
    """Apply the standard cell pipeline to ``rows[row][column]`` in place."""
    value = rows[row][column]
    if value is None:
        rows[row][column] = ""
        return

    if row == 0 and not options.raw_headers:
        if column == 0 and len(rows[0]) > 1:
            strip_common_prefix(rows[0])
        value = humanize_header(str(rows[0][column]))

    if not options.no_truncate:
        value = scalar_text(value)[:MAX_CELL_LENGTH]

    if options.debug_location:
        value = f"[{row},{column}]{scalar_text(value)}"

    rows[row][column] = value


def transform_table(
    rows: TableRows,
    options: Options,
    transform: Optional[TransformFunc] = None,
) -> TableRows:
    """Run ``transform`` (default :func:`default_transform`) over every cell, row-major."""
    apply = transform or default_transform
    for row_index, row in enumerate(rows):
        for column_index in range(len(row)):
            apply(rows, row_index, column_index, options)
    return rows
