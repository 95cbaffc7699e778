"""Configuration command handler for the readly CLI."""

import logging
import sys

from ...config import (
    get_config_file_path,
    get_kindle_base_path,
    list_config,
    parse_config_value,
    set_config_value,
)
from ...exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def handle_configure(args):
    """Handle the 'config' command and its subcommands."""
    command = getattr(args, "config_command", None) or "show"

    if command == "show":
        handle_config_show(args)
    elif command == "set":
        handle_config_set(args)
    elif command == "paths":
        handle_config_paths(args)
    else:
        logger.error("Unknown config subcommand: %s", command)
        sys.exit(1)


def handle_config_show(_):
    """Show current configuration."""
    logger.info("Showing current configuration")

    print("\n--- Current Configuration ---")
    for key, value in list_config().items():
        print(f"{key}: {value}")

    if not get_kindle_base_path():
        print("\nNo Kindle base path configured; connected devices will be auto-detected.")
        print("Set one with 'readly config set kindle_base_path PATH'.")


def handle_config_set(args):
    """Set a configuration value."""
    try:
        value = parse_config_value(args.key, args.value)
    except ConfigurationError as e:
        logger.error("%s", e)
        print(f"Error: {e}")
        sys.exit(1)

    if not set_config_value(args.key, value):
        logger.error("Failed to set configuration value: %s", args.key)
        print("Error: Failed to update configuration.")
        sys.exit(1)

    logger.info("Configuration value set: %s = %s", args.key, value)
    print(f"Configuration updated: {args.key} = {value}")


def handle_config_paths(_):
    """Show configuration paths."""
    config_file = get_config_file_path()
    print("\n--- Application Paths ---")
    print(f"Configuration directory: {config_file.parent}")
    print(f"Configuration file: {config_file}")
    print(f"Platform: {sys.platform}")
