"""Layered configuration loading: defaults < YAML < env (.env) < CLI."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

_TOP_LEVEL_KEYS = ("app_name", "environment")

# flat key (env / CLI spelling) -> (section, key inside section)
_FLAT_KEYS: dict[str, tuple[str, str]] = {
    "http_timeout_seconds": ("http", "timeout_seconds"),
    "http_follow_redirects": ("http", "follow_redirects"),
    "http_user_agent": ("http", "user_agent"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
    "content_api_base_url": ("content_api", "base_url"),
    "unlock_api_base_url": ("unlock", "base_url"),
    "unlock_agent": ("unlock", "agent"),
    "premium_api_key": ("unlock", "api_key"),
}

_SECTIONS = frozenset(section for section, _ in _FLAT_KEYS.values()) | {"catalog"}


def _merge(base: dict[str, Any], layer: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``layer`` into ``base`` in place; nested mappings merge key by key."""
    for key, value in layer.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _merge(current, value)
        else:
            base[key] = value
    return base


def _sectioned(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring one layer into the sectioned shape AppConfig validates.

    A layer may mix both spellings, e.g. ``{"log_level": "DEBUG",
    "catalog": {"max_items": 5}}``. Unknown keys are dropped.
    """
    out: dict[str, Any] = {
        key: deepcopy(dict(value))
        for key, value in data.items()
        if key in _SECTIONS and isinstance(value, Mapping)
    }
    out.update({key: data[key] for key in _TOP_LEVEL_KEYS if key in data})

    for flat_key, (section, key) in _FLAT_KEYS.items():
        if flat_key in data:
            out.setdefault(section, {})[key] = data[flat_key]
    return out


def _yaml_layer(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """
    Build the validated AppConfig.

    Precedence, lowest first: built-in defaults, YAML file, environment
    variables (a .env file only fills variables not already set), CLI
    overrides. Missing explicit paths raise FileNotFoundError. Nothing is
    written to disk.
    """
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [DEFAULT_CONFIG]
    if config_path is not None:
        layers.append(_yaml_layer(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _merge(merged, _sectioned(layer))

    return AppConfig.model_validate(merged)
