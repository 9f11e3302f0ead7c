# src/falsifier/core/config.py
"""Run configuration loading with presets.

Provides YAML preset loading and deep merge for configuration precedence
(overrides > config file > preset > defaults). Presets ship inside the
package under falsifier/presets/.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from falsifier.contracts.config import RunConfig
from falsifier.contracts.errors import ConfigurationError

PRESETS_DIR = Path(__file__).resolve().parent.parent / "presets"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dicts, with override taking precedence.

    Returns:
        Merged configuration dict (new dict, does not mutate inputs).
    """
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def list_presets(presets_dir: Path = PRESETS_DIR) -> list[str]:
    """Sorted preset names (without .yaml extension)."""
    if not presets_dir.exists():
        return []
    return sorted(p.stem for p in presets_dir.glob("*.yaml"))


def _read_mapping(path: Path, label: str) -> dict[str, Any]:
    with path.open() as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"{label} must be a YAML mapping, got {type(loaded).__name__}")
    return loaded


def load_preset(preset_name: str, presets_dir: Path = PRESETS_DIR) -> dict[str, Any]:
    """Load a preset configuration by name.

    Raises:
        ConfigurationError: If the preset does not exist or is not a mapping.
        yaml.YAMLError: If the preset YAML is malformed.
    """
    preset_path = presets_dir / f"{preset_name}.yaml"
    if not preset_path.exists():
        available = list_presets(presets_dir)
        raise ConfigurationError(f"Preset '{preset_name}' not found. Available presets: {available}")
    return _read_mapping(preset_path, f"Preset '{preset_name}'")


def load_run_config(
    *,
    preset: str | None = None,
    config_file: Path | None = None,
    overrides: dict[str, Any] | None = None,
    presets_dir: Path = PRESETS_DIR,
) -> RunConfig:
    """Load a RunConfig with precedence handling.

    Precedence (highest to lowest):
    1. overrides - Values supplied by the caller
    2. config_file - User's YAML configuration file
    3. preset - Named preset configuration
    4. defaults - Built-in RunConfig defaults

    Raises:
        ConfigurationError: If a source is missing or the merged config is invalid.
        yaml.YAMLError: If YAML is malformed.
    """
    config_dict: dict[str, Any] = {}

    if preset is not None:
        config_dict = load_preset(preset, presets_dir)

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        config_dict = deep_merge(config_dict, _read_mapping(config_file, f"Config file {config_file}"))

    if overrides is not None:
        config_dict = deep_merge(config_dict, overrides)

    config_dict["preset_name"] = preset

    try:
        return RunConfig(**config_dict)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid run configuration: {exc}") from exc
