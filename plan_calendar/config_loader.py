#!/usr/bin/env python3
"""
Configuration loader for the plan calendar.

Loads settings from plan_calendar.yaml with environment variable overrides.
A Config is built once by the caller and passed where it is needed.
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

import yaml

from .errors import ConfigError

CONFIG_FILENAME = 'plan_calendar.yaml'

# Allowlist of environment variables that can be substituted
ALLOWED_ENV_VARS: Set[str] = {
    'PC_LOG_LEVEL',
    'PC_LOG_FORMAT',
    'PC_RECOMMENDED_MIN_WEEKS',
    'PC_OUTPUT_DIR',
}

_ENV_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')

DEFAULTS: Dict[str, Any] = {
    'validation': {
        'plan_weeks_min': 1,
        'plan_weeks_max': 104,
        'recommended_min_weeks': 6,
    },
    'logging': {
        'level': 'INFO',
        'format': 'human',
    },
    'output': {
        'directory': '.',
    },
}


def _merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _process_env_vars(obj: Any) -> Any:
    """
    Recursively process ${VAR_NAME:-default} substitutions.

    Only allowlisted environment variables are read; any other name
    resolves to its default (or an empty string).
    """
    if isinstance(obj, str):
        def replace(match):
            var_name = match.group(1)
            default = match.group(2) or ''
            if var_name not in ALLOWED_ENV_VARS:
                return default
            return os.environ.get(var_name, default)

        return _ENV_PATTERN.sub(replace, obj)

    elif isinstance(obj, dict):
        return {k: _process_env_vars(v) for k, v in obj.items()}

    elif isinstance(obj, list):
        return [_process_env_vars(item) for item in obj]

    return obj


def find_config_file() -> Optional[Path]:
    """First existing config file: $PC_CONFIG, ./plan_calendar.yaml, ~/.plan_calendar/."""
    candidates = []
    env_path = os.environ.get('PC_CONFIG')
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.extend([
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / '.plan_calendar' / CONFIG_FILENAME,
    ])

    for path in candidates:
        if path.exists():
            return path
    return None


class Config:
    """Plan calendar configuration."""

    def __init__(self, values: Optional[Dict] = None, source: Optional[Path] = None):
        self._config = _merge(DEFAULTS, values or {})
        self.source = source

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'Config':
        """
        Load configuration from a YAML file.

        With no path, the usual locations are searched and defaults are used
        when nothing is found. An explicit path that does not exist is an error.
        """
        if path is not None:
            config_path = Path(path).expanduser()
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_path}")
        else:
            config_path = find_config_file()
            if config_path is None:
                return cls()

        try:
            with open(config_path, 'r') as f:
                raw_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {config_path}: {e}") from e

        if not isinstance(raw_config, dict):
            raise ConfigError(f"Config {config_path} must be a mapping")

        return cls(_process_env_vars(raw_config), source=config_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example: config.get('validation.recommended_min_weeks', 6)
        """
        value = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_int(self, key_path: str, default: int) -> int:
        """Integer setting; env-substituted strings are converted."""
        value = self.get(key_path, default)
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Config value {key_path} must be an integer, got {value!r}") from None

    @property
    def recommended_min_weeks(self) -> int:
        return self.get_int('validation.recommended_min_weeks', 6)

    @property
    def plan_weeks_range(self):
        return (self.get_int('validation.plan_weeks_min', 1),
                self.get_int('validation.plan_weeks_max', 104))
