from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from graph_builder.core.model import GenerateSettings


# Enough for the equation example up to ~10 terms; raise for bigger searches.
DEFAULT_SETTINGS = GenerateSettings(max_nodes=1000, max_edges=1000)

SETTINGS_KEYS: tuple[str, ...] = ("max_nodes", "max_edges")


class SettingsConfigError(ValueError):
    pass


def load_settings_file(path: str | Path) -> dict[str, int]:
    """Load generation ceilings from a YAML file.

    Format:
      max_nodes: 5000
      max_edges: 20000

    Both keys are optional. Returns only the keys present in the file.
    """
    p = Path(path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SettingsConfigError("settings file must be a mapping of name -> int")

    out: dict[str, int] = {}
    for k, v in raw.items():
        if k not in SETTINGS_KEYS:
            raise SettingsConfigError(
                f"unknown setting: {k} (choose from: {', '.join(SETTINGS_KEYS)})"
            )
        out[k] = _positive_int(k, v)
    return out


def merged_settings(overrides: dict[str, Any] | None = None) -> GenerateSettings:
    """Return DEFAULT_SETTINGS with overrides applied. None values are ignored."""
    if not overrides:
        return DEFAULT_SETTINGS
    values: dict[str, int] = {}
    for k, v in overrides.items():
        if v is None:
            continue
        if k not in SETTINGS_KEYS:
            raise SettingsConfigError(f"unknown setting: {k}")
        values[k] = _positive_int(k, v)
    return replace(DEFAULT_SETTINGS, **values)


def load_and_merge(settings_file: str | None, **overrides: Any) -> GenerateSettings:
    file_values: dict[str, Any] = load_settings_file(settings_file) if settings_file else {}
    file_values.update({k: v for k, v in overrides.items() if v is not None})
    return merged_settings(file_values)


def _positive_int(key: str, value: Any) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise SettingsConfigError(f"setting '{key}' must be a positive integer")
    return value
