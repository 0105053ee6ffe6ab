"""
Command-line argument parsing for Vendor Status.

This module parses the options of a single run: where configuration and logs
live, which message to edit, and whether to publish at all.
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version
from ..time.civil import instant_from_datetime


class PathValidationError(Exception):
    """Raised when a path validation fails."""

    pass


class ParsedArgs(NamedTuple):
    """Container for parsed command-line arguments."""

    config_file: Path | None
    log_folder: Path | None
    message_id: int | None
    now: int | None
    dry_run: bool


class DefaultPaths:
    """Default paths for Vendor Status."""

    CONFIG_FILE: Path = Path("config.yml")


def validate_config_file_path(config_file_str: str, required: bool) -> Path | None:
    """
    Validate configuration file path.

    Args:
        config_file_str: String path to configuration file
        required: Whether the file must exist (it was given explicitly)

    Returns:
        Resolved Path, or None if an optional default file is absent

    Raises:
        PathValidationError: If the configuration file path is invalid
    """
    try:
        config_file = Path(config_file_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid config file path: {e}") from e

    if config_file.exists() and config_file.is_dir():
        raise PathValidationError(
            f"Config file path exists but is not a file: {config_file}"
        )

    if not config_file.exists():
        if required:
            raise PathValidationError(f"Config file does not exist: {config_file}")
        return None

    return config_file


def validate_folder_path(path_str: str, folder_name: str) -> Path:
    """
    Validate and resolve a folder path.

    Args:
        path_str: String representation of the folder path
        folder_name: Name of the folder (for error messages)

    Returns:
        Resolved absolute path to the folder

    Raises:
        PathValidationError: If the path is invalid
    """
    try:
        path = Path(path_str).expanduser().resolve()
    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid {folder_name} path: {e}") from e

    if path.exists() and not path.is_dir():
        raise PathValidationError(
            f"{folder_name.capitalize()} path exists but is not a directory: {path}"
        )

    return path


def parse_message_id(value: str) -> int:
    """argparse type for Discord message IDs."""
    try:
        message_id = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid message ID: {value!r}") from e
    if message_id <= 0:
        raise argparse.ArgumentTypeError(f"invalid message ID: {value!r}")
    return message_id


def parse_now(value: str) -> int:
    """
    argparse type for ``--now``: an ISO 8601 timestamp, UTC when no offset is given.

    Examples:
        >>> parse_now("2025-03-04T09:00:00Z")
        1741078800
        >>> parse_now("2025-03-04T04:00:00-05:00")
        1741078800
    """
    try:
        dt = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 timestamp: {value!r}") from e
    return instant_from_datetime(dt)


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for Vendor Status.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="vendor-status",
        description="Post or update The Division 2 vendor status message on a Discord webhook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  DISCORD_WEBHOOK_URL   Webhook to post to (required unless --dry-run)
  DISCORD_MESSAGE_ID    Message to edit; a new message is created when unset

Examples:
  vendor-status
    Create or update the status message using config.yml if present

  vendor-status --dry-run --now 2025-03-04T09:00:00Z
    Print the message as it would look at a given instant
""",
    )

    defaults = DefaultPaths()

    _ = parser.add_argument(
        "--config-file",
        type=str,
        default=None,
        help=(
            f"Path to the configuration file (default: {defaults.CONFIG_FILE} if it exists). "
            "Built-in defaults are used when no file is found."
        ),
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--log-folder",
        type=str,
        default=None,
        help="Also write rotating log files to this folder (created if missing)",
        metavar="PATH",
    )

    _ = parser.add_argument(
        "--message-id",
        type=parse_message_id,
        default=None,
        help="ID of the message to edit (overrides DISCORD_MESSAGE_ID)",
        metavar="ID",
    )

    _ = parser.add_argument(
        "--now",
        type=parse_now,
        default=None,
        help="Evaluate schedules at this ISO 8601 instant instead of the current time",
        metavar="TIMESTAMP",
    )

    _ = parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render the status message and log it without publishing",
    )

    _ = parser.add_argument(
        "--version", action="version", version=f"%(prog)s {get_version()}"
    )

    return parser


def parse_arguments(args: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv[1:])

    Returns:
        ParsedArgs containing validated and resolved values

    Raises:
        SystemExit: If argument parsing or path validation fails, or --help is requested
    """
    parser = create_argument_parser()
    parsed = parser.parse_args(args)

    config_file_str: str | None = getattr(parsed, "config_file", None)
    log_folder_str: str | None = getattr(parsed, "log_folder", None)

    try:
        if config_file_str is None:
            config_file = validate_config_file_path(
                str(DefaultPaths.CONFIG_FILE), required=False
            )
        else:
            config_file = validate_config_file_path(config_file_str, required=True)

        log_folder = (
            validate_folder_path(log_folder_str, "log folder")
            if log_folder_str is not None
            else None
        )
    except PathValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    return ParsedArgs(
        config_file=config_file,
        log_folder=log_folder,
        message_id=getattr(parsed, "message_id", None),
        now=getattr(parsed, "now", None),
        dry_run=bool(getattr(parsed, "dry_run", False)),
    )
