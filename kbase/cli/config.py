"""Configuration management for the CLI."""

import copy
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULTS: dict[str, Any] = {
    "records": None,
    "search": {"sort_field": "updated_at", "sort_direction": "desc"},
    "suggestions": {"limit": 10},
    "highlight": {"tag": "mark"},
}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(
                f"Config file must contain a mapping, not {type(data).__name__}"
            )
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "kbase" / "config.yaml")

        # Project config
        paths.append(Path(".kbase.yaml"))
        paths.append(Path("kbase.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from defaults, files and environment variables.

    An explicit ``path`` replaces the default search locations; unreadable
    default files are skipped, an unreadable explicit file is an error.
    """
    config = copy.deepcopy(DEFAULTS)

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))
    else:
        # Last one wins for conflicting keys
        for candidate in Config.get_config_paths():
            if candidate.exists():
                try:
                    config = Config.merge_configs(config, Config.from_file(candidate))
                except ValueError:
                    continue

    env_overrides: dict[str, Any] = {}
    if records := os.environ.get("KBASE_RECORDS"):
        env_overrides["records"] = records

    return Config.merge_configs(config, env_overrides)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
