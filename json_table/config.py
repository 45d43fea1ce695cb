"""
config
======

YAML configuration for the ``json-table`` command.

Example ``json-table.yml``::

    query: "/name,/location"
    options: "noTruncate,rawHeaders"
    strict_query: false
    max_depth: 256
    timeout: 30
    headers:
      Accept: application/json

Resolution order, lowest to highest precedence:

1. built-in defaults (:class:`Settings`)
2. the YAML file
3. environment variables ``JSON_TABLE_QUERY``, ``JSON_TABLE_OPTIONS``,
   ``JSON_TABLE_MAX_DEPTH``
4. command-line flags
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import ConfigError
from .fetch import DEFAULT_TIMEOUT_SECONDS
from .flattener import DEFAULT_MAX_DEPTH

ENV_PREFIX = "JSON_TABLE_"


@dataclass(frozen=True)
class Settings:
    """Resolved import settings.

    Attributes:
        query: Comma-separated path prefixes to keep.
        options: Comma-separated formatting flags.
        strict_query: Match query prefixes on ``/`` boundaries only.
        max_depth: Maximum container nesting.
        timeout: HTTP timeout in seconds.
        headers: Extra HTTP request headers.
    """

    query: str = ""
    options: str = ""
    strict_query: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    headers: Dict[str, str] = field(default_factory=dict)


def load_config(path: Path) -> Dict[str, Any]:
    """Load a YAML config file; an empty file yields ``{}``."""
    if not path.exists():
        raise ConfigError(f"config not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping: {path}")
    return data


def deep_get(d: Mapping[str, Any], keys: List[str], default: Any = None) -> Any:
    """Safely get nested dict value with default."""
    cur: Any = d
    for k in keys:
        if not isinstance(cur, Mapping) or k not in cur:
            return default
        cur = cur[k]
    return cur


def get_env_var(name: str) -> Optional[str]:
    """Return ``JSON_TABLE_<NAME>`` or None when unset/blank."""
    value = os.environ.get(f"{ENV_PREFIX}{name.upper()}", "")
    return value or None


def _as_int(value: Any, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from exc
    if number < 1:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def _as_float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc


def _as_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def _as_str(value: Any) -> str:
    # YAML lists are accepted for query/options and joined back.
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return "" if value is None else str(value)


def settings_from_config(cfg: Mapping[str, Any]) -> Settings:
    """Build :class:`Settings` from a loaded config mapping plus environment."""
    base = Settings()
    headers = deep_get(cfg, ["headers"], {}) or {}
    if not isinstance(headers, Mapping):
        raise ConfigError("headers must be a mapping of name: value")

    settings = Settings(
        query=_as_str(deep_get(cfg, ["query"], base.query)),
        options=_as_str(deep_get(cfg, ["options"], base.options)),
        strict_query=_as_bool(deep_get(cfg, ["strict_query"], base.strict_query), "strict_query"),
        max_depth=_as_int(deep_get(cfg, ["max_depth"], base.max_depth), "max_depth"),
        timeout=_as_float(deep_get(cfg, ["timeout"], base.timeout), "timeout"),
        headers={str(k): str(v) for k, v in headers.items()},
    )

    env_query = get_env_var("query")
    env_options = get_env_var("options")
    env_depth = get_env_var("max_depth")
    if env_query is not None:
        settings = replace(settings, query=env_query)
    if env_options is not None:
        settings = replace(settings, options=env_options)
    if env_depth is not None:
        settings = replace(settings, max_depth=_as_int(env_depth, ENV_PREFIX + "MAX_DEPTH"))
    return settings


def resolve_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    """Resolve settings from an optional config file, the environment and overrides.

    Overrides set to ``None`` are ignored so unset CLI flags fall through.
    """
    cfg = load_config(config_path) if config_path is not None else {}
    settings = settings_from_config(cfg)
    changes = {k: v for k, v in overrides.items() if v is not None}
    if "max_depth" in changes:
        changes["max_depth"] = _as_int(changes["max_depth"], "max_depth")
    return replace(settings, **changes)
