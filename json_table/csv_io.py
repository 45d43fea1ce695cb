"""CSV helpers for table rows.

This module writes the rows produced by :func:`json_table.flatten_to_table`
to CSV files (or any text stream) and reads them back.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, List, Sequence, TextIO

from .flattener import scalar_text


def write_csv_stream(
    rows: Sequence[Sequence[Any]],
    handle: TextIO,
    delimiter: str = ",",
) -> None:
    """Write rows to an open text stream such as ``sys.stdout``."""
    writer = csv.writer(handle, delimiter=delimiter, lineterminator="\n")
    for row in rows:
        writer.writerow([scalar_text(value) for value in row])


def write_csv(
    rows: Sequence[Sequence[Any]],
    output_path: Path | str,
    delimiter: str = ",",
    encoding: str = "utf-8",
) -> None:
    """Write table rows to CSV exactly as laid out.

    Parameters
    ----------
    rows : Sequence[Sequence[Any]]
        Rows to write, header row first when present.
    output_path : Path | str
        Path to output CSV file. Parent directories are created.
    delimiter : str, optional
        CSV delimiter (default: ",").
    encoding : str, optional
        File encoding (default: "utf-8").

    Raises
    ------
    OSError
        If the file cannot be written.
    """
    if isinstance(output_path, str):
        output_path = Path(output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding=encoding) as handle:
        write_csv_stream(rows, handle, delimiter=delimiter)


def read_csv(
    input_path: Path | str,
    delimiter: str = ",",
    encoding: str = "utf-8",
) -> List[List[str]]:
    """Read a CSV file into a list of rows.

    Parameters
    ----------
    input_path : Path | str
        Path to input CSV file.
    delimiter : str, optional
        CSV delimiter (default: ",").
    encoding : str, optional
        File encoding (default: "utf-8").

    Returns
    -------
    List[List[str]]
        Rows of string cells.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist.
    """
    if isinstance(input_path, str):
        input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"CSV file not found: {input_path}")

    with input_path.open("r", newline="", encoding=encoding) as handle:
        return [row for row in csv.reader(handle, delimiter=delimiter)]
