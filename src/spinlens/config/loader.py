"""Load analysis config from YAML or JSON files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .schema import AnalysisConfig

# Key names used by the browser app's saved settings.
CAMEL_CASE_ALIASES = {
    "recentSpinsWindow": "recent_window_size",
    "recentWindowSize": "recent_window_size",
    "hotThreshold": "hot_threshold",
    "coldThreshold": "cold_threshold",
    "frequencyWeight": "frequency_weight",
    "hotColdWeight": "hot_cold_weight",
    "trendWeight": "trend_weight",
}


class ConfigLoadError(ValueError):
    """Raised when config cannot be loaded or parsed."""


def load_config(path: str | Path, section: str | None = None) -> AnalysisConfig:
    """Load a YAML/JSON config file, optionally from a nested section."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = _load_yaml(config_path)
    elif suffix == ".json":
        data = _load_json(config_path)
    else:
        raise ConfigLoadError(
            f"Unsupported config format '{suffix}'. Use .yaml/.yml or .json."
        )

    if not isinstance(data, dict):
        raise ConfigLoadError("Config root must be a JSON/YAML object.")

    if section is not None:
        if section not in data:
            raise ConfigLoadError(f"Config section '{section}' not found in {config_path}.")
        data = data[section]
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Config section '{section}' must be an object.")

    return config_from_mapping(data)


def config_from_mapping(data: Mapping[str, Any]) -> AnalysisConfig:
    """Validate a plain mapping, accepting camelCase keys from saved settings."""
    normalized: dict[str, Any] = {}
    for key, value in data.items():
        name = CAMEL_CASE_ALIASES.get(str(key), str(key))
        if name in normalized:
            raise ConfigLoadError(f"Config key '{name}' is given more than once.")
        normalized[name] = value
    return AnalysisConfig.model_validate(normalized)


def _load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        try:
            parsed = yaml.safe_load(file)
        except yaml.YAMLError as exc:
            raise ConfigLoadError(f"Invalid YAML in {path}: {exc}") from exc
    return {} if parsed is None else parsed


def _load_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as file:
        try:
            parsed = json.load(file)
        except json.JSONDecodeError as exc:
            raise ConfigLoadError(f"Invalid JSON in {path}: {exc}") from exc
    return {} if parsed is None else parsed
