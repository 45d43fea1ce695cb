"""Turn arbitrary JSON documents into spreadsheet-style tables.

This package flattens any JSON value into rows and columns: object paths
become columns, arrays of objects become rows, and cells are formatted for
display. It also provides loaders for URLs, files and text, CSV output and a
small command-line interface.
"""

from .csv_io import read_csv, write_csv
from .errors import (
    ConfigError,
    DepthExceeded,
    InputError,
    JsonTableError,
    ParseError,
    TransportError,
)
from .importer import (
    error_table,
    flatten_to_table,
    import_json,
    import_json_file,
    import_json_text,
    load_table,
)
from .options import Options, parse_options
from .query import QueryFilter, parse_query

__all__ = [
    "flatten_to_table",
    "import_json",
    "import_json_file",
    "import_json_text",
    "error_table",
    "load_table",
    "Options",
    "parse_options",
    "QueryFilter",
    "parse_query",
    "write_csv",
    "read_csv",
    "JsonTableError",
    "InputError",
    "TransportError",
    "ParseError",
    "DepthExceeded",
    "ConfigError",
]
