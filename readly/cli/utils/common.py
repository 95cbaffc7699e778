"""Common utility functions for CLI commands."""

import logging
import os
from pathlib import Path

from ...config import TRUE_VALUES, get_config_value, get_kindle_base_path
from ...exceptions import ConfigurationError

# Environment variable for the Kindle base path (optional)
KINDLE_BASE_PATH_ENV_VAR = "READLY_KINDLE_BASE_PATH"

logger = logging.getLogger(__name__)


def get_kindle_base_path_cli(args) -> Path:
    """Resolve the Kindle base path from args, environment, config or device detection.

    Raises:
        ConfigurationError: If no base path can be found
    """
    if getattr(args, "base_path", None):
        logger.debug("Using Kindle base path from command line argument.")
        return Path(args.base_path)

    path_from_env = os.environ.get(KINDLE_BASE_PATH_ENV_VAR)
    if path_from_env:
        logger.debug("Using Kindle base path from environment variable %s.", KINDLE_BASE_PATH_ENV_VAR)
        return Path(path_from_env)

    path_from_config = get_kindle_base_path()
    if path_from_config:
        logger.debug("Using Kindle base path from configuration.")
        return Path(path_from_config)

    from ...utils.device_detection import find_kindle_base_path

    detected = find_kindle_base_path()
    if detected:
        logger.info("Automatically detected Kindle device at %s", detected)
        return detected

    raise ConfigurationError(
        "No Kindle device found. Pass --base-path, set "
        f"{KINDLE_BASE_PATH_ENV_VAR}, or run 'readly config set kindle_base_path PATH'."
    )


def get_multiline_content_cli(args) -> bool:
    """Whether multi-line highlights are enabled on the command line or in the config."""
    if getattr(args, "multiline", False):
        return True
    value = get_config_value("multiline_content", False)
    # Hand-edited config files may hold the flag as a string
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)
