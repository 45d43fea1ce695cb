"""Error taxonomy for JSON table imports.

Every failure the import boundary knows how to report derives from
:class:`JsonTableError`. The boundary functions in :mod:`json_table.importer`
catch these and turn them into the two-row error table.
"""

from __future__ import annotations


class JsonTableError(Exception):
    """Base class for all json_table errors."""


class InputError(JsonTableError):
    """A required top-level argument is missing or invalid."""


class TransportError(JsonTableError):
    """Fetching the JSON document failed (non-success status, unreachable host)."""


class ParseError(JsonTableError):
    """The fetched or supplied text is not valid JSON."""


class DepthExceeded(JsonTableError):
    """The JSON value nests deeper than the configured maximum."""

    def __init__(self, max_depth: int, path: str) -> None:
        super().__init__(f"JSON nesting exceeds maximum depth of {max_depth} at {path or '/'!r}")
        self.max_depth = max_depth
        self.path = path


class ConfigError(JsonTableError):
    """A configuration file is missing or malformed."""
