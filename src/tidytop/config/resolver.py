"""Environment variable resolution helpers for configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping

import yaml

from tidytop.common import JsonDict
from tidytop.constants import ENV_PREFIX
from tidytop.utils import deep_merge


def collect_env_overrides(environ: Mapping[str, str] | None = None) -> JsonDict:
    """Turn ``TIDYTOP_CONFIG__A__B=value`` variables into ``{"a": {"b": value}}``."""
    environ = os.environ if environ is None else environ
    override_data: JsonDict = {}

    for key, value in environ.items():
        if not key.upper().startswith(ENV_PREFIX):
            continue
        path = key[len(ENV_PREFIX) :].strip("_")
        if not path:
            continue
        segments = [segment.lower() for segment in path.split("__") if segment]
        _insert_override(override_data, segments, _parse_env_value(value))

    return override_data


def apply_env_overrides(data: Mapping[str, object], environ: Mapping[str, str] | None = None) -> dict[str, object]:
    """Merge environment overrides over raw configuration data."""
    overrides = collect_env_overrides(environ)
    if not overrides:
        return dict(data)
    return deep_merge(data, overrides)


def _insert_override(data: JsonDict, path: list[str], value: object) -> None:
    cursor = data
    *parents, leaf = path
    for segment in parents:
        child = cursor.get(segment)
        if not isinstance(child, dict):
            child = {}
            cursor[segment] = child
        cursor = child
    cursor[leaf] = value


def _parse_env_value(raw: str) -> object:
    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
    return parsed
