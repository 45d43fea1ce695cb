"""Output formatting options.

Options arrive as a comma-separated flag string such as
``"noTruncate,rawHeaders"`` and are parsed into a fixed, immutable record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Options:
    """Formatting flags applied after flattening.

    Attributes
    ----------
    no_truncate : bool
        Keep cell values at full length instead of cutting them to 256 characters.
    raw_headers : bool
        Leave header cells as raw paths (``/location/city``).
    no_headers : bool
        Drop the header row from the output when there is at least one data row.
    debug_location : bool
        Prefix every non-empty cell with its ``[row,col]`` position.
    """
    no_truncate: bool = False
    raw_headers: bool = False
    no_headers: bool = False
    debug_location: bool = False


# Flag token (lower-cased) -> Options field name.
OPTION_TOKENS = {
    "notruncate": "no_truncate",
    "rawheaders": "raw_headers",
    "noheaders": "no_headers",
    "debuglocation": "debug_location",
}


def parse_options(text: Union[str, Options, None] = None) -> Options:
    """Parse a comma-separated flag string into :class:`Options`.

    Parameters
    ----------
    text : str | Options | None, optional
        Flags such as ``"noTruncate, rawHeaders"``. Tokens are trimmed and
        matched case-insensitively; unknown tokens are ignored. ``None`` or an
        empty string yields the defaults. An :class:`Options` instance is
        returned unchanged.

    Returns
    -------
    Options
        The parsed flags.

    Raises
    ------
    InputError
        If ``text`` is neither a string nor :class:`Options`.

    Examples
    --------
    >>> parse_options("noTruncate,rawHeaders,bogus")
    Options(no_truncate=True, raw_headers=True, no_headers=False, debug_location=False)
    """
    if isinstance(text, Options):
        return text
    if not text:
        return Options()
    if not isinstance(text, str):
        raise InputError(f"Options must be a comma-separated string, got {type(text).__name__}")

    flags = {}
    for token in text.split(","):
        key = token.strip().lower()
        if not key:
            continue
        field = OPTION_TOKENS.get(key)
        if field is None:
            logger.debug("Ignoring unknown option %r", token.strip())
            continue
        flags[field] = True
    return Options(**flags)


def format_options(options: Optional[Options]) -> str:
    """Render options back into the flag-string form (used for logs and reports)."""
    if options is None:
        return ""
    names = {field: token for token, field in OPTION_TOKENS.items()}
    return ",".join(names[field] for field in OPTION_TOKENS.values() if getattr(options, field))
