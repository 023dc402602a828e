"""Configuration Management Package

Looks for config in multiple places (in order):

1. .dailyrc in current directory (project-specific)
2. .dailyrc in home directory (global default)
3. Built-in defaults

GIT_DAILY_* environment variables override whatever was loaded.
"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from git_daily import PROVIDER_NAMES

# Valid configuration values
VALID_PROVIDERS = set(PROVIDER_NAMES)

ENV_OVERRIDES = {
    'GIT_DAILY_PROVIDER': 'provider',
    'GIT_DAILY_MODEL': 'model',
    'GIT_DAILY_AUTHOR': 'author',
    'GIT_DAILY_TIMEOUT': 'timeout',
}


@dataclass
class Config:
    """User configuration with sensible defaults."""
    provider: str = "openai"
    model: Optional[str] = None
    author: Optional[str] = None
    since_hour: int = 18  # Default window starts yesterday at this hour
    timeout: float = 30

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using '{defaults.provider}'")
            self.provider = defaults.provider

        if not isinstance(self.since_hour, int) or isinstance(self.since_hour, bool) \
                or not 0 <= self.since_hour <= 23:
            warnings.append(f"Invalid since_hour '{self.since_hour}', using {defaults.since_hour}")
            self.since_hour = defaults.since_hour

        if not isinstance(self.timeout, (int, float)) or isinstance(self.timeout, bool) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        return warnings

    def apply_env(self, environ=None) -> 'Config':
        """Apply GIT_DAILY_* overrides in place."""
        environ = os.environ if environ is None else environ
        for var, key in ENV_OVERRIDES.items():
            value = environ.get(var)
            if not value:
                continue
            if key == 'timeout':
                try:
                    value = float(value)
                except ValueError:
                    print(f"Config warning: Invalid {var} '{value}', ignoring", file=sys.stderr)
                    continue
            setattr(self, key, value)

        for warning in self.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        # Validate and print warnings to stderr
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_FILENAME = ".dailyrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            self._config = self._load_from_file(local_path)
            self._config_path = local_path
            return self._config

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            self._config = self._load_from_file(home_path)
            self._config_path = home_path
            return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        self._config = config
        self._config_path = path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "save_config",
    "get_config_path",
    "VALID_PROVIDERS",
    "ENV_OVERRIDES",
]
