"""Configuration management for readly.

Settings live in a JSON file inside a platform-specific configuration
directory. The most important one is the base path of the mounted Kindle
device, which the CLI hands to the core as an explicit argument.
"""

import json
import logging
import os
import platform
from functools import lru_cache
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError
from .logging_config import LOG_LEVELS

logger = logging.getLogger(__name__)

APP_NAME = "readly"

# Default configuration settings
DEFAULT_CONFIG = {
    "kindle_base_path": "",
    "log_level": "INFO",
    "multiline_content": False,
}

VALID_CONFIG_KEYS = list(DEFAULT_CONFIG)

TRUE_VALUES = ("true", "yes", "1", "on")
FALSE_VALUES = ("false", "no", "0", "off")


def get_config_dir() -> Path:
    """Get the platform-specific configuration directory."""
    system = platform.system()
    home = Path.home()

    if system == "Darwin":  # macOS
        config_dir = home / "Library" / "Application Support" / APP_NAME
    elif system == "Windows":
        config_dir = Path(os.getenv("APPDATA", str(home / "AppData" / "Roaming"))) / APP_NAME
    else:  # Linux and others
        config_dir = home / ".config" / APP_NAME

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@lru_cache(maxsize=1)
def get_config_file_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from file or create it with defaults if missing."""
    config_file = get_config_file_path()

    if config_file.exists():
        try:
            with open(config_file, encoding="utf-8") as f:
                config = json.load(f)
            logger.debug("Loaded configuration from %s", config_file)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Error loading configuration from %s: %s", config_file, e)
            logger.info("Using default configuration instead")
            return DEFAULT_CONFIG.copy()

        if not isinstance(config, dict):
            logger.error("Configuration in %s is not a JSON object; using default configuration", config_file)
            return DEFAULT_CONFIG.copy()

        # Merge with defaults to ensure all keys exist
        merged_config = DEFAULT_CONFIG.copy()
        merged_config.update(config)
        return merged_config

    config = DEFAULT_CONFIG.copy()
    save_config(config)
    return config


def save_config(config: dict[str, Any]) -> bool:
    """Save configuration to file.

    Args:
        config: Configuration dictionary to save

    Returns:
        bool: True if successful, False otherwise
    """
    config_file = get_config_file_path()
    try:
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.error("Error saving configuration to %s: %s", config_file, e)
        return False

    logger.debug("Saved configuration to %s", config_file)
    return True


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a configuration value by key.

    Args:
        key: The configuration key to retrieve
        default: Default value to return if key not found

    Returns:
        The configuration value or default if not found
    """
    return load_config().get(key, default)


def set_config_value(key: str, value: Any) -> bool:
    """Set a configuration value.

    Args:
        key: The configuration key to set
        value: The value to set

    Returns:
        bool: True if successful, False otherwise
    """
    config = load_config()
    config[key] = value
    return save_config(config)


def parse_config_value(key: str, raw_value: str) -> Any:
    """Validate a value given on the command line and convert it to its stored type.

    Args:
        key: The configuration key
        raw_value: The value as typed by the user

    Returns:
        The converted value

    Raises:
        ConfigurationError: If the key is unknown or the value is invalid for it
    """
    if key not in VALID_CONFIG_KEYS:
        raise ConfigurationError(f"Unknown configuration key: {key}. Valid keys are: {', '.join(VALID_CONFIG_KEYS)}")

    if key == "multiline_content":
        if raw_value.lower() in TRUE_VALUES:
            return True
        if raw_value.lower() in FALSE_VALUES:
            return False
        raise ConfigurationError(f"Invalid boolean value for {key}: {raw_value}. Use 'true' or 'false'.")

    if key == "log_level":
        if raw_value.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {raw_value}. Valid values are: {', '.join(LOG_LEVELS)}")
        return raw_value.upper()

    return raw_value


def get_kindle_base_path() -> str | None:
    """Get the configured base path of the Kindle device.

    Returns:
        str | None: The base path, or None if not configured
    """
    path = get_config_value("kindle_base_path", "")
    return path or None


def list_config() -> dict[str, Any]:
    """Get a dictionary of all configuration values for display."""
    display_config = load_config().copy()
    if not display_config.get("kindle_base_path"):
        display_config["kindle_base_path"] = "[Not Set]"
    return display_config
