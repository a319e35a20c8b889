"""Configuration loading for pylaunch (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .version_resolver import DEFAULT_FALLBACK_OUTPUT, DEFAULT_INTERPRETERS, VersionResolver


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LaunchConfig:
    """Settings read from a pylaunch config file."""

    interpreters: List[str] = field(default_factory=lambda: list(DEFAULT_INTERPRETERS))
    fallback_version: str = DEFAULT_FALLBACK_OUTPUT
    templates_dir: Optional[Path] = None
    output_dir: Optional[Path] = None

    def version_resolver(self) -> VersionResolver:
        return VersionResolver(
            interpreters=self.interpreters,
            fallback_output=self.fallback_version,
        )


def _read_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            if path.suffix.lower() in {".yml", ".yaml"}:
                data = yaml.safe_load(handle)
            else:
                data = json.load(handle)
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    return data


def _optional_path(value: Any, key: str, base: Path) -> Optional[Path]:
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    path = Path(value).expanduser()
    return path if path.is_absolute() else (base / path).resolve()


def load_config(path: Path | None) -> LaunchConfig:
    """Load configuration from ``path``; defaults when no path is given."""
    if path is None:
        return LaunchConfig()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_config(path)
    config = LaunchConfig()
    base = path.parent.resolve()

    interpreters = data.get("interpreters")
    if interpreters is not None:
        if not isinstance(interpreters, list) or not all(
            isinstance(item, str) and item for item in interpreters
        ):
            raise ConfigError("'interpreters' must be a list of executable names")
        config.interpreters = list(interpreters)

    fallback = data.get("fallback_version")
    if fallback is not None:
        if not isinstance(fallback, str):
            raise ConfigError("'fallback_version' must be a string")
        # Accept a bare "3.12.0" as well as a full "Python 3.12.0" banner.
        config.fallback_version = fallback if fallback.startswith("Python ") else f"Python {fallback}"

    config.templates_dir = _optional_path(data.get("templates_dir"), "templates_dir", base)
    config.output_dir = _optional_path(data.get("output_dir"), "output_dir", base)
    return config
