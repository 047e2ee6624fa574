# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
# Purpose: Defines the config unit so this responsibility stays isolated, testable, and easy to evolve.

"""
Configuration loading utilities for jsonresponses.

Conventions:
- Response config: config/responses.json under the project root.
- Environment variables override JSON values.
- JSON values can reference environment variables using ${VAR_NAME} placeholders.
- Typed keys (json.pretty_print, json.indent) are coerced after merging, so a
  placeholder or env value of "false" / "4" means False / 4.

Only generic JSON dicts are returned; callers pick the keys they need.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_DIR = BASE_DIR / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "responses.json"

DEFAULT_RESPONSE_CONFIG: Dict[str, Any] = {
    "json": {"pretty_print": False, "indent": 2},
    "session": {"secret_key": None},
}

_ENV_PATTERN = re.compile(r"\$\{([A-Z0-9_]+)\}")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUTHY:
            return True
        if text in _FALSY:
            return False
    raise ValueError(f"Config value {key} must be a boolean, got {value!r}")


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Config value {key} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(
            f"Config value {key} must be an integer, got {value!r}"
        ) from None


# section -> key -> coercion applied to file, env and default values alike
_TYPED_KEYS: Dict[str, Dict[str, Callable[[str, Any], Any]]] = {
    "json": {"pretty_print": _as_bool, "indent": _as_int},
}


def _substitute_placeholders(value: Any) -> Any:
    """Replace ${VAR} in strings (recursively through dicts and lists).

    Unset variables keep their placeholder text.
    """
    if isinstance(value, str):
        return _ENV_PATTERN.sub(
            lambda m: os.getenv(m.group(1), m.group(0)), value
        )
    if isinstance(value, dict):
        return {k: _substitute_placeholders(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_placeholders(v) for v in value]
    return value


def _merge_sections(
    base: Mapping[str, Any], override: Mapping[str, Any]
) -> Dict[str, Any]:
    """Overlay ``override`` on ``base`` one section at a time.

    Sections that are dicts on both sides are merged key by key; anything
    else in ``override`` replaces the base value.
    """
    merged: Dict[str, Any] = {
        k: dict(v) if isinstance(v, Mapping) else v for k, v in base.items()
    }
    for section, values in override.items():
        current = merged.get(section)
        if isinstance(values, Mapping) and isinstance(current, dict):
            current.update(values)
        else:
            merged[section] = dict(values) if isinstance(values, Mapping) else values
    return merged


def normalize_response_config(config: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a copy of ``config`` with placeholders resolved and typed keys coerced.

    Used for configs built in code as well as loaded ones.
    """
    return _coerce_typed_keys(
        _merge_sections(_substitute_placeholders(dict(config or {})), {})
    )


def _coerce_typed_keys(config: Dict[str, Any]) -> Dict[str, Any]:
    for section, coercers in _TYPED_KEYS.items():
        values = config.get(section)
        if not isinstance(values, dict):
            continue
        for key, coerce in coercers.items():
            if key in values:
                values[key] = coerce(f"{section}.{key}", values[key])
    return config


def load_json_file(path: os.PathLike[str] | str | None) -> Dict[str, Any]:
    """Read the config file; a missing path or non-object document reads as {}.

    Raises ValueError for malformed JSON.
    """
    if path is None:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON at {p}: {e}") from e
    return data if isinstance(data, dict) else {}


def _env_overrides_for_responses() -> Dict[str, Any]:
    """Collect JSONRESPONSES_* environment variables into config sections.

    Supported variables:
    - JSONRESPONSES_PRETTY_PRINT -> json.pretty_print
    - JSONRESPONSES_INDENT -> json.indent
    - JSONRESPONSES_SESSION_SECRET -> session.secret_key

    Values stay strings here; typed keys are coerced after merging.
    """
    result: Dict[str, Any] = {}
    pretty = os.getenv("JSONRESPONSES_PRETTY_PRINT")
    indent = os.getenv("JSONRESPONSES_INDENT")
    secret = os.getenv("JSONRESPONSES_SESSION_SECRET")

    json_cfg: Dict[str, Any] = {}
    if pretty is not None:
        json_cfg["pretty_print"] = pretty
    if indent is not None:
        json_cfg["indent"] = indent
    if json_cfg:
        result["json"] = json_cfg
    if secret is not None:
        result["session"] = {"secret_key": secret}
    return result


def load_response_config(
    path: os.PathLike[str] | str | None = DEFAULT_CONFIG_PATH,
    defaults: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Load response configuration applying precedence and interpolation.

    Precedence: env overrides > JSON file > defaults

    Raises ValueError for malformed JSON or a typed key that cannot be coerced.
    """
    defaults = DEFAULT_RESPONSE_CONFIG if defaults is None else defaults
    file_config = _substitute_placeholders(load_json_file(path))
    merged = _merge_sections(defaults, file_config)
    merged = _merge_sections(merged, _env_overrides_for_responses())
    return _coerce_typed_keys(merged)
