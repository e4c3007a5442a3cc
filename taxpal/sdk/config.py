"""Configuration management for TaxPal.

Configuration lives in a single settings.json file:

- data_dir: custom location for the income/expense records
- default_year: tax year used when a command omits --year
- default_output_format: "text" or "json"

Config directory resolution:
1. TAXPAL_CONFIG_PATH environment variable (if set)
2. ~/.config/taxpal/ (XDG_CONFIG_HOME fallback)

Data path resolution:
1. settings.json "data_dir" key (if set)
2. XDG_DATA_HOME/taxpal/ or ~/.local/share/taxpal/
"""

import json
import os
from datetime import date
from pathlib import Path
from typing import Any


APP_NAME = "taxpal"
SETTINGS_FILENAME = "settings.json"
OUTPUT_FORMATS = ("text", "json")

# Keys accepted by 'taxpal settings set'
KNOWN_SETTINGS = ("data_dir", "default_year", "default_output_format")


class ConfigNotFoundError(Exception):
    """Raised when settings.json exists but cannot be read."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TAXPAL_CONFIG_PATH environment variable
    2. ~/.config/taxpal/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TAXPAL_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        ConfigNotFoundError: If the file exists but is not valid JSON
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    try:
        with open(settings_file, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigNotFoundError(f"Invalid settings file {settings_file}: {e}") from e


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json.

    Args:
        key: Setting key (e.g., "data_dir", "default_year")
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_data_path() -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" when set, otherwise XDG_DATA_HOME/taxpal/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_default_year() -> int:
    """Tax year used when none is given: settings.default_year or the current year."""
    value = get_setting("default_year")
    if value:
        return int(value)
    return date.today().year


def get_default_output_format() -> str:
    """Output format used when none is given ("text" unless configured)."""
    value = get_setting("default_output_format", "text")
    return value if value in OUTPUT_FORMATS else "text"
