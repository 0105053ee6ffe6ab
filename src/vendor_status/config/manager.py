"""Configuration manager for Vendor Status.

This module loads the optional YAML configuration file, layers the
environment variables used by CI schedulers on top of it, and validates the
result with the Pydantic schema.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from ..config.schema import VendorStatusConfig


logger = logging.getLogger(__name__)

WEBHOOK_URL_ENV = "DISCORD_WEBHOOK_URL"
MESSAGE_ID_ENV = "DISCORD_MESSAGE_ID"


class ConfigManager:
    """
    Configuration manager for YAML config files with Pydantic validation.

    The configuration file is optional; every section has defaults, and the
    webhook URL and message ID normally come from the environment.
    """

    @staticmethod
    def read_config_file(config_path: Path) -> dict[str, object]:
        """
        Read raw configuration data from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Raw configuration mapping (empty for an empty file)

        Raises:
            FileNotFoundError: If the config file doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            ValueError: If the document is not a mapping
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            return {}
        if isinstance(raw_config_data, dict):
            return dict(raw_config_data)
        raise ValueError(
            f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
        )

    @staticmethod
    def apply_environment(
        config_data: dict[str, object], environ: Mapping[str, str]
    ) -> dict[str, object]:
        """
        Overlay webhook settings from the environment onto raw config data.

        Empty environment values are ignored so an unset CI secret does not
        clear a value from the file.
        """
        merged = dict(config_data)
        webhook_raw = merged.get("webhook")
        webhook: dict[str, object] = (
            dict(webhook_raw) if isinstance(webhook_raw, dict) else {}
        )

        for env_name, key in ((WEBHOOK_URL_ENV, "url"), (MESSAGE_ID_ENV, "message_id")):
            value = environ.get(env_name, "").strip()
            if value:
                logger.debug("Using %s from environment", env_name)
                webhook[key] = value

        if webhook or webhook_raw is not None:
            merged["webhook"] = webhook
        return merged

    @staticmethod
    def load_config(
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> VendorStatusConfig:
        """
        Load, merge and validate configuration.

        Args:
            config_path: YAML file to read, or None to use defaults only
            environ: Environment mapping (defaults to ``os.environ``)

        Returns:
            VendorStatusConfig: Validated configuration object

        Raises:
            FileNotFoundError: If ``config_path`` is given but doesn't exist
            yaml.YAMLError: If the YAML syntax is invalid
            pydantic.ValidationError: If the configuration fails validation
        """
        if environ is None:
            environ = os.environ

        config_data: dict[str, object] = {}
        if config_path is not None:
            config_data = ConfigManager.read_config_file(config_path)
            logger.info("Loaded configuration file %s", config_path)

        merged = ConfigManager.apply_environment(config_data, environ)
        return VendorStatusConfig.model_validate(merged)
