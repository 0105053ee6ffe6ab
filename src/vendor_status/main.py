"""
Main entry point for Vendor Status.

This module parses arguments, sets up logging, loads configuration,
evaluates the vendor schedules for the current instant, renders the status
embed and creates or edits the webhook message. Each invocation is a single
stateless run; any failure ends the run with exit status 1.
"""

import logging
import logging.handlers
import os
import sys
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from .config.manager import MESSAGE_ID_ENV, ConfigManager
from .status.renderer import build_status_embed
from .status.snapshot import build_snapshot
from .utils.cli.args import ParsedArgs, parse_arguments
from .utils.core.exceptions import VendorStatusError
from .utils.time.civil import TimezoneConverter, now_instant
from .webhook.publisher import WebhookPublisher


def setup_logging(log_folder: Path | None = None) -> None:
    """
    Configure logging for a single run.

    Console output goes to stdout at INFO. When ``log_folder`` is given, a
    rotating DEBUG log and a rotating ERROR log are written there as well.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Clear any existing handlers
    root_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
    )
    simple_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_folder is not None:
        _ = log_folder.mkdir(exist_ok=True, parents=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_folder / "vendor-status.log",
            maxBytes=1024 * 1024,  # 1MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            log_folder / "vendor-status-errors.log",
            maxBytes=1024 * 1024,  # 1MB
            backupCount=3,
            encoding="utf-8",
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


async def run(args: ParsedArgs, environ: Mapping[str, str] | None = None) -> int:
    """
    Execute one status update.

    Args:
        args: Parsed command-line arguments
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Process exit status (0 on success, 1 on any failure)
    """
    if environ is None:
        environ = os.environ

    try:
        config = ConfigManager.load_config(args.config_file, environ)
    except FileNotFoundError as e:
        logger.error(f"{e}")
        return 1
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse configuration: {e}")
        return 1
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.message_id is not None:
        config.webhook.message_id = args.message_id

    now = args.now if args.now is not None else now_instant()

    try:
        converter = TimezoneConverter()
        snapshot = build_snapshot(config.schedule, now, converter)
        embed = build_status_embed(snapshot, config.appearance, config.links)

        if args.dry_run:
            logger.info("Dry run, not publishing. Rendered description:\n%s", embed.description)
            return 0

        async with WebhookPublisher(
            config.webhook.url, username=config.webhook.username
        ) as publisher:
            result = await publisher.publish_or_update(
                embed,
                config.webhook.message_id,
                initial_content=config.appearance.initial_content,
            )
    except VendorStatusError as e:
        logger.error(f"{e}")
        if e.user_message != str(e):
            logger.error(e.user_message)
        return 1

    if result.created:
        logger.info(f"FIRST RUN: created message id: {result.message_id}")
        logger.info(
            f"Add this ID as {MESSAGE_ID_ENV} to enable editing instead of new posts."
        )
    else:
        logger.info(f"Edited message: {result.message_id}")
    return 0


async def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the Vendor Status application.

    Parses arguments, configures logging and performs one run.
    """
    args = parse_arguments(argv)
    setup_logging(args.log_folder)
    logger.debug("Vendor Status starting (dry_run=%s)", args.dry_run)

    try:
        return await run(args)
    except Exception as e:
        logger.exception(f"Fatal error in main: {e}")
        return 1
