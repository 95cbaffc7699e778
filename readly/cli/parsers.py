"""Command-line argument parsers for readly."""

import argparse

from .. import __version__
from ..config import VALID_CONFIG_KEYS
from ..logging_config import LOG_LEVELS

OUTPUT_FORMATS = ["text", "json", "csv"]


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Extract highlights from the 'My Clippings.txt' file of a Kindle device.", prog="readly"
    )

    _setup_global_options(parser)

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    _setup_highlights_command(subparsers)
    _setup_devices_command(subparsers)
    _setup_config_command(subparsers)
    _setup_version_command(subparsers)

    return parser


def _setup_global_options(parser):
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show program's version number and exit."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Set the logging level (default: from config, INFO if unset).",
    )
    parser.add_argument(
        "--log-file", type=str, default=None, help="Log output to a specified file in addition to the console."
    )


def _add_source_options(parser):
    parser.add_argument(
        "--base-path",
        "-b",
        type=str,
        help="Root of the mounted Kindle device (default: READLY_KINDLE_BASE_PATH, config, or auto-detection).",
    )
    parser.add_argument(
        "--multiline",
        action="store_true",
        help="Capture highlights that span several lines instead of skipping them.",
    )
    parser.add_argument("--format", type=str, choices=OUTPUT_FORMATS, default="text", help="Output format (default: text)")


def _setup_highlights_command(subparsers):
    """Set up the highlights command and its subcommands."""
    from .commands.highlights import handle_highlights

    parser_highlights = subparsers.add_parser("highlights", help="Show the highlights stored on a Kindle device")
    highlights_subparsers = parser_highlights.add_subparsers(
        dest="highlights_command", help="Highlight commands"
    )

    parser_highlights_list = highlights_subparsers.add_parser("list", help="List highlights")
    _add_source_options(parser_highlights_list)
    parser_highlights_list.add_argument("--title", type=str, help="Filter by book title (partial match)")
    parser_highlights_list.add_argument("--author", type=str, help="Filter by author (partial match)")
    parser_highlights_list.add_argument("--limit", type=int, help="Maximum number of highlights to show")

    parser_highlights_books = highlights_subparsers.add_parser("books", help="List all books with highlight counts")
    _add_source_options(parser_highlights_books)

    parser_highlights.set_defaults(func=handle_highlights)


def _setup_devices_command(subparsers):
    from .commands.devices import handle_devices

    parser_devices = subparsers.add_parser("devices", help="List detected Kindle devices")
    parser_devices.set_defaults(func=handle_devices)


def _setup_config_command(subparsers):
    """Set up the config command and its subcommands."""
    from .commands.config import handle_configure

    parser_config = subparsers.add_parser("config", help="Configure the application")
    config_subparsers = parser_config.add_subparsers(dest="config_command", help="Configuration commands")

    config_subparsers.add_parser("show", help="Show current configuration")

    parser_config_set = config_subparsers.add_parser("set", help="Set a configuration value")
    parser_config_set.add_argument("key", type=str, choices=VALID_CONFIG_KEYS, help="Configuration key to set")
    parser_config_set.add_argument("value", type=str, help="Value to set")

    config_subparsers.add_parser("paths", help="Show configuration paths")

    parser_config.set_defaults(func=handle_configure)


def _setup_version_command(subparsers):
    from .commands.version import handle_version

    parser_version = subparsers.add_parser("version", help="Show version information")
    parser_version.set_defaults(func=handle_version)
