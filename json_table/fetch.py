"""Loading JSON documents from URLs, files and text.

These helpers only move bytes and parse them; they raise
:class:`~json_table.errors.TransportError` or
:class:`~json_table.errors.ParseError` and leave reporting to the caller.
Requests are made once, without retries.
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .errors import InputError, ParseError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


def basic_auth_header(username: str, password: str) -> Dict[str, str]:
    """Return an ``Authorization`` header for HTTP basic auth."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def load_json_text(text: Union[str, bytes, None]) -> Any:
    """Parse JSON text.

    Parameters
    ----------
    text : str | bytes | None
        JSON document. Bytes are decoded as UTF-8.

    Returns
    -------
    Any
        The parsed value.

    Raises
    ------
    InputError
        If ``text`` is missing or blank.
    ParseError
        If ``text`` is not valid JSON.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Response is not valid UTF-8: {exc}") from exc
    if text is None or not text.strip():
        raise InputError("No JSON text supplied")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc


def load_json_file(path: Union[Path, str]) -> Any:
    """Read and parse a local JSON file."""
    path = Path(path)
    if not path.exists():
        raise InputError(f"JSON file not found: {path}")
    return load_json_text(path.read_text(encoding="utf-8"))


def fetch_json(
    url: str,
    payload: Union[str, bytes, Mapping[str, Any], None] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """Fetch ``url`` and parse the response body as JSON.

    Parameters
    ----------
    url : str
        Absolute ``http(s)`` URL.
    payload : str | bytes | Mapping | None, optional
        Request body. When given the request is a POST; mappings are
        form-encoded.
    headers : Mapping[str, str] | None, optional
        Extra request headers.
    timeout : float, optional
        Socket timeout in seconds (default: 30).

    Raises
    ------
    InputError
        If ``url`` is missing or not an http(s) URL.
    TransportError
        On a non-success status or a connection failure.
    ParseError
        If the body is not valid JSON.
    """
    if not url or not isinstance(url, str):
        raise InputError("A URL is required")
    if not url.lower().startswith(("http://", "https://")):
        raise InputError(f"Unsupported URL: {url}")

    data: Optional[bytes] = None
    if payload is not None:
        if isinstance(payload, Mapping):
            data = urllib.parse.urlencode(payload).encode("utf-8")
        elif isinstance(payload, str):
            data = payload.encode("utf-8")
        else:
            data = payload

    request = urllib.request.Request(url, data=data, method="POST" if data is not None else "GET")
    for name, value in (headers or {}).items():
        request.add_header(name, value)

    logger.info("Fetching %s %s", request.get_method(), url)
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            body = response.read()
    except urllib.error.HTTPError as exc:
        raise TransportError(f"Error getting data from {url}: HTTP {exc.code} {exc.reason}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise TransportError(f"Error getting data from {url}: {exc}") from exc

    if not 200 <= status < 300:
        raise TransportError(f"Error getting data from {url}: HTTP {status}")
    if not body.strip():
        raise ParseError(f"Empty response from {url}")
    logger.debug("Fetched %d bytes from %s", len(body), url)
    return load_json_text(body)
