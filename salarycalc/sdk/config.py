"""Configuration management for Salary Calc.

Machine-specific settings live in settings.json:

- default_region: region used when the caller does not pick one
- default_municipality: municipality used when the caller does not pick one
- manual_municipal_rate: municipal rate (percent) for manual mode
- jurisdictions_dir: directory with custom regions/municipalities/provinces YAML

Config directory resolution:
1. SALARY_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/salary-calc/ (XDG_CONFIG_HOME fallback)
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


APP_NAME = "salary-calc"
SETTINGS_FILENAME = "settings.json"

DEFAULT_REGION = "LOMBARDIA"
DEFAULT_MUNICIPALITY = "MILANO"
DEFAULT_MANUAL_MUNICIPAL_RATE = 0.8


class ConfigError(Exception):
    """Raised when settings.json cannot be read or holds invalid values."""
    pass


class Settings(BaseModel):
    """Validated settings.json content."""

    model_config = ConfigDict(extra="forbid")

    default_region: str = DEFAULT_REGION
    default_municipality: Optional[str] = DEFAULT_MUNICIPALITY
    manual_municipal_rate: float = Field(default=DEFAULT_MANUAL_MUNICIPAL_RATE, ge=0, le=100)
    jurisdictions_dir: Optional[str] = None


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SALARY_CALC_CONFIG_PATH environment variable
    2. ~/.config/salary-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("SALARY_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigError: If the file exists but is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {settings_file}: {e}") from e


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file

    Raises:
        ConfigError: If a value fails validation
    """
    validate_settings(settings)

    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "default_region")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Args:
        key: Setting key
        value: Value to set

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def validate_settings(settings: dict) -> Settings:
    """Validate a settings dict, raising ConfigError with a readable message."""
    try:
        return Settings(**settings)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e


def get_defaults() -> Settings:
    """Effective settings: settings.json merged over built-in defaults."""
    return validate_settings(load_settings())
