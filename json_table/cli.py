"""Command-line interface for importing JSON as a table."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from functools import partial
from pathlib import Path
from typing import Any, Dict, Sequence

from .config import resolve_settings
from .csv_io import write_csv, write_csv_stream
from .errors import ConfigError
from .fetch import basic_auth_header, fetch_json, load_json_file
from .importer import load_table
from .table import TableRows


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _parse_headers(values: Sequence[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise SystemExit(f"ERROR: header must look like NAME:VALUE, got {value!r}")
        headers[name.strip()] = content.strip()
    return headers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flatten a JSON document into table rows (CSV or JSON).")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=Path, help="Path to JSON input")
    source.add_argument("--url", help="URL returning JSON")
    parser.add_argument("--output", type=Path, help="Path to output CSV/JSON (default: CSV on stdout)")
    parser.add_argument("--query", help="Comma-separated path prefixes to keep, e.g. /name,/location")
    parser.add_argument(
        "--options",
        help="Comma-separated flags: noTruncate, rawHeaders, noHeaders, debugLocation",
    )
    parser.add_argument("--config", type=Path, help="YAML config file")
    parser.add_argument(
        "--strict-query",
        action="store_true",
        default=None,
        help="Match query prefixes on path segment boundaries only",
    )
    parser.add_argument("--max-depth", type=int, help="Maximum JSON nesting depth")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--post", help="Request body; sends a POST instead of a GET")
    parser.add_argument("--header", action="append", default=[], metavar="NAME:VALUE", help="Extra HTTP header")
    parser.add_argument("--user", metavar="USER:PASSWORD", help="HTTP basic auth credentials")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _write_rows(rows: TableRows, output: Path | None) -> None:
    if output is None:
        write_csv_stream(rows, sys.stdout)
        return
    if output.suffix.lower() == ".json":
        _write_json(output, rows)
    else:
        write_csv(rows, output)
    print(f"Wrote {len(rows)} row(s) to {output}")


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = resolve_settings(
            args.config,
            query=args.query,
            options=args.options,
            strict_query=args.strict_query,
            max_depth=args.max_depth,
            timeout=args.timeout,
        )
    except ConfigError as exc:
        raise SystemExit(f"ERROR: {exc}")

    table_kwargs: Dict[str, Any] = {
        "segment_match": settings.strict_query,
        "max_depth": settings.max_depth,
    }

    if args.url:
        headers = dict(settings.headers)
        headers.update(_parse_headers(args.header))
        if args.user:
            user, _, password = args.user.partition(":")
            headers.update(basic_auth_header(user, password))
        load = partial(fetch_json, args.url, payload=args.post, headers=headers, timeout=settings.timeout)
    else:
        load = partial(load_json_file, args.input)

    rows, failed = load_table(load, settings.query, settings.options, **table_kwargs)
    _write_rows(rows, args.output)
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
