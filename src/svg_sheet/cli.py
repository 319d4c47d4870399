"""Command line entry point for the SVG sprite sheet builder.

Parses arguments, loads the optional YAML configuration, applies command line
overrides, and runs either a one-shot build or watch mode.
"""

import argparse
import sys
from typing import Any

import yaml
from pydantic import ValidationError

from svg_sheet import __version__
from svg_sheet.builder import build_sprite
from svg_sheet.constants import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_FILE,
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    LOG_LEVEL_CHOICES,
    LOGGER_NAME,
)
from svg_sheet.exceptions import InvalidConfigError, SvgSheetError, chain_exception
from svg_sheet.models.config import AppConfig
from svg_sheet.utils.early_error_handler import handle_keyboard_interrupt, report_error
from svg_sheet.utils.logging import setup_logging
from svg_sheet.utils.path_utils import validate_config_path
from svg_sheet.watcher import SpriteWatcher

# Command line destination -> (config section, config field)
_OVERRIDES = {
    "directory": ("build", "directory"),
    "file": ("build", "file"),
    "dry_run": ("build", "dry_run"),
    "fail_on_warn": ("build", "fail_on_warn"),
    "poll": ("watch", "poll"),
    "debounce_ms": ("watch", "debounce_ms"),
    "quiet": ("logging", "quiet"),
    "verbose": ("logging", "verbose"),
    "log_level": ("logging", "level"),
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Options left unset on the command line stay None so that values from the
    configuration file are kept.
    """
    parser = argparse.ArgumentParser(
        prog="svg-sheet",
        description="Combine a directory of SVG icons into a single sprite sheet",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-f",
        "--file",
        default=None,
        help=f"Sprite file to write (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "-d",
        "--directory",
        default=None,
        help=f"Directory containing the SVG icons (default: {DEFAULT_INPUT_DIR})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to configuration file (default: search for {DEFAULT_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--poll",
        action="store_true",
        default=None,
        help="Use filesystem polling instead of event-based watching",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=None,
        help=f"Debounce interval in milliseconds for watch mode (default: {DEFAULT_DEBOUNCE_MS})",
    )
    parser.add_argument(
        "--quiet", action="store_true", default=None, help="Suppress non-error output"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Increase verbosity (info-level messages)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Parse and validate but do not write the sprite",
    )
    parser.add_argument(
        "--fail-on-warn",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Treat warnings as errors",
    )
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVEL_CHOICES,
        default=None,
        help="Log level, overriding --quiet and --verbose",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("build", help="Build the sprite once (default)")
    subparsers.add_parser("watch", help="Rebuild the sprite whenever the icons change")
    return parser


def load_config(config_path: str | None) -> AppConfig:
    """Load the configuration file, or defaults when there is none.

    Args:
        config_path: Explicit configuration path, or None to search.

    Returns:
        The loaded configuration.

    Raises:
        ConfigFileNotFoundError: If an explicit path does not exist.
        InvalidConfigError: If the file cannot be read or fails validation.
    """
    path = validate_config_path(config_path)
    if path is None:
        return AppConfig()

    try:
        return AppConfig.from_yaml(path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValidationError) as e:
        raise chain_exception(
            InvalidConfigError(
                f"invalid configuration file: {path}",
                {"path": str(path), "error": str(e)},
            ),
            e,
        ) from e


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Merge command line options into a configuration.

    Args:
        config: Configuration loaded from file or defaults.
        args: Parsed command line arguments.

    Returns:
        A new configuration, validated again so that field validators apply
        to the overridden values.
    """
    data: dict[str, dict[str, Any]] = config.model_dump()
    for dest, (section, field) in _OVERRIDES.items():
        value = getattr(args, dest, None)
        if value is not None:
            data[section][field] = value
    return AppConfig.model_validate(data)


def run(args: argparse.Namespace) -> int:
    """Run the selected command.

    Args:
        args: Parsed command line arguments.

    Returns:
        The process exit code.
    """
    try:
        config = apply_overrides(load_config(args.config), args)
    except ValidationError as e:
        error = InvalidConfigError("invalid command line options", {"error": str(e)})
        report_error(chain_exception(error, e))
        return EXIT_FAILURE
    except SvgSheetError as e:
        report_error(e)
        return EXIT_FAILURE

    setup_logging(config.logging, LOGGER_NAME)

    try:
        if args.command == "watch":
            SpriteWatcher(config).run()
        else:
            build_sprite(config.build)
    except KeyboardInterrupt:
        handle_keyboard_interrupt()
        return EXIT_INTERRUPTED
    except SvgSheetError as e:
        report_error(e)
        return EXIT_FAILURE

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the svg-sheet command.

    Args:
        argv: Arguments without the program name, defaults to sys.argv[1:].

    Returns:
        The process exit code.
    """
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
