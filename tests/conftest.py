"""
Global test configuration fixtures for Vendor Status tests.

This module provides reusable pytest fixtures for converters, fixed
instants and validated configuration objects.
"""

from __future__ import annotations

import pytest

from vendor_status.config.schema import VendorStatusConfig, WebhookConfig
from vendor_status.utils.time.civil import TimezoneConverter
from tests.utils.test_helpers import TEST_WEBHOOK_URL, utc_instant


NEW_YORK = "America/New_York"


@pytest.fixture
def converter() -> TimezoneConverter:
    """A fresh converter with its own zone cache."""
    return TimezoneConverter()


@pytest.fixture
def webhook_url() -> str:
    """A syntactically valid Discord webhook URL."""
    return TEST_WEBHOOK_URL


@pytest.fixture
def default_config() -> VendorStatusConfig:
    """Default configuration with a webhook URL set."""
    return VendorStatusConfig(webhook=WebhookConfig(url=TEST_WEBHOOK_URL))


@pytest.fixture
def wednesday_anchor() -> int:
    """Wednesday 2025-03-05 03:00 EST, the vendor anchor for that week."""
    return utc_instant(2025, 3, 5, 8, 0)
