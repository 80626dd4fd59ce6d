"""Runtime settings loaded from the environment or a .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    "ConfigError",
    "Settings",
    "get_settings",
    "load_env_file",
    "load_settings",
    "parse_str_list",
]

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class Settings:
    """Settings for hostgrants.

    Attributes
    ----------
    log_level : str
        Logging level
    log_dir : Path | None
        Directory for JSONL logs; console only when unset
    options_path : Path | None
        Default profile options file for the CLI
    granted : list[str]
        Permissions the in-memory host starts with
    """

    log_level: str = "INFO"
    log_dir: Path | None = None
    options_path: Path | None = None
    granted: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if self.options_path and isinstance(self.options_path, str):
            self.options_path = Path(self.options_path)

        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"HOSTGRANTS_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{self.log_level}'"
            )

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, otherwise from os.environ.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        return cls(
            log_level=os.environ.get("HOSTGRANTS_LOG_LEVEL", "INFO"),
            log_dir=Path(os.environ["HOSTGRANTS_LOG_DIR"]) if os.environ.get("HOSTGRANTS_LOG_DIR") else None,
            options_path=(
                Path(os.environ["HOSTGRANTS_OPTIONS_PATH"]) if os.environ.get("HOSTGRANTS_OPTIONS_PATH") else None
            ),
            granted=parse_str_list(os.environ.get("HOSTGRANTS_GRANTED", "")),
        )


def load_env_file(env_file: Path) -> None:
    """Load KEY=VALUE lines from ``env_file`` into os.environ."""
    with open(env_file) as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ[key] = value


def parse_str_list(value: str) -> list[str]:
    """Parse a comma-separated list, dropping empty items."""
    if not value:
        return []

    return [item.strip() for item in value.split(",") if item.strip()]


_settings: Settings | None = None


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from environment and keep them as the current settings."""
    global _settings
    _settings = Settings.from_env(env_file)
    return _settings


def get_settings() -> Settings:
    """Get current settings.

    Raises
    ------
    ConfigError
        If settings not loaded
    """
    if _settings is None:
        raise ConfigError("Settings not loaded. Call load_settings() first.")
    return _settings
