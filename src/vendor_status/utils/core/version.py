"""
Version utilities for Vendor Status.

This module reads the installed distribution version, falling back to a
placeholder when running from an uninstalled checkout.
"""

import logging
from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "vendor-status"
UNKNOWN_VERSION = "0.0.0+unknown"


@lru_cache(maxsize=1)
def get_version() -> str:
    """
    Get the project version from the installed package metadata.

    Returns:
        Version string (e.g., "1.0.0"), or a placeholder if not installed
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        logger.debug("%s is not installed, using placeholder version", DISTRIBUTION_NAME)
        return UNKNOWN_VERSION
