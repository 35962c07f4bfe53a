"""Configuration loader for dependency resolution.

Settings come from a JSON file given explicitly, else the file named by the
``EFFECTIVE_TREE_CONFIG`` environment variable, else the built-in npm
defaults. Recognised keys (all optional):

``manifestName``
    File name of a package descriptor (default ``package.json``).
``installDir``
    Directory searched for installed packages (default ``node_modules``).
``rootDependencyKeys``
    Dependency sections read from the root manifest.
``dependencyKeys``
    Dependency sections read from every installed package.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .discovery import INSTALL_DIR
from .models import DEPENDENCY_KEYS


CONFIG_PATH_ENV_VAR = "EFFECTIVE_TREE_CONFIG"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Top-level settings container."""

    manifest_name: str = "package.json"
    install_dir: str = INSTALL_DIR
    root_dependency_keys: tuple[str, ...] = ("dependencies", "devDependencies", "peerDependencies")
    dependency_keys: tuple[str, ...] = ("dependencies", "peerDependencies")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating every field present."""
        defaults = cls()
        manifest_name = _file_name(data, "manifestName", defaults.manifest_name)
        install_dir = _file_name(data, "installDir", defaults.install_dir)
        return cls(
            manifest_name=manifest_name,
            install_dir=install_dir,
            root_dependency_keys=_keys(data, "rootDependencyKeys", defaults.root_dependency_keys),
            dependency_keys=_keys(data, "dependencyKeys", defaults.dependency_keys),
        )


def _file_name(data: dict[str, Any], field: str, default: str) -> str:
    value = data.get(field, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{field}' must be a non-empty string")
    if "/" in value or "\\" in value:
        raise ConfigError(f"'{field}' must be a single path segment, got '{value}'")
    return value


def _keys(data: dict[str, Any], field: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(field)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{field}' must be an array of strings")
    unknown = sorted(set(value) - set(DEPENDENCY_KEYS))
    if unknown:
        raise ConfigError(
            f"'{field}' has unknown dependency section(s): {', '.join(unknown)}. "
            f"Known sections: {', '.join(DEPENDENCY_KEYS)}"
        )
    return tuple(dict.fromkeys(value))


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. EFFECTIVE_TREE_CONFIG environment variable
    3. None, meaning built-in defaults
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to the config file. If not provided, uses the
            EFFECTIVE_TREE_CONFIG env var or falls back to the defaults.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return Settings.from_dict(data)
