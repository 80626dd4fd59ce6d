"""Profile options loading.

Supports:
- Default options from config/defaults.yaml
- User profile from a YAML (or JSON) file
- Nested key access with dot notation
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..config.settings import ConfigError
from .options import ProfileOptions

__all__ = ["OptionsConfig", "load_profile_options"]

DEFAULTS_PATH = Path(__file__).parent.parent.parent.parent / "config" / "defaults.yaml"


class OptionsConfig:
    """Profile options merged from defaults and a user file.

    Example:
        >>> config = OptionsConfig.load("profile.yaml")
        >>> config.get("parsing.enableMecabParser", False)
        False
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    @classmethod
    def load(
        cls,
        options_path: str | Path | None = None,
        defaults_path: str | Path | None = None,
    ) -> OptionsConfig:
        """Load options from files.

        Parameters
        ----------
        options_path
            Path to the user profile file; defaults only when ``None``
        defaults_path
            Path to defaults (default: config/defaults.yaml)

        Returns
        -------
        OptionsConfig
            Loaded configuration

        Raises
        ------
        ConfigError
            If the user profile file is missing or not a mapping
        """
        if defaults_path is None:
            defaults_path = DEFAULTS_PATH

        defaults = cls._load_yaml_file(defaults_path) if Path(defaults_path).exists() else {}

        user_options: dict[str, Any] = {}
        if options_path is not None:
            if not Path(options_path).exists():
                raise ConfigError(f"Options file not found: {options_path}")
            user_options = cls._load_yaml_file(options_path)

        return cls(cls._deep_merge(defaults, user_options))

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated key, e.g. ``"anki.terms.fields"``."""
        value: Any = self._data

        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value

    def to_dict(self) -> dict[str, Any]:
        return self._data.copy()

    def to_profile_options(self) -> ProfileOptions:
        return ProfileOptions.from_dict(self._data)

    @staticmethod
    def _load_yaml_file(path: str | Path) -> dict[str, Any]:
        """Load a YAML mapping; JSON files parse as YAML too."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load options from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Options file {path} must contain a mapping, got {type(data).__name__}")

        return data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = OptionsConfig._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_profile_options(options_path: str | Path | None = None) -> ProfileOptions:
    """Load :class:`ProfileOptions` from ``options_path`` merged over defaults.

    Raises
    ------
    ConfigError
        If the file is missing or malformed
    """
    return OptionsConfig.load(options_path).to_profile_options()
