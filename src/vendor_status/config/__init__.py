"""Configuration loading and schema for Vendor Status."""

from .manager import ConfigManager
from .schema import (
    AppearanceConfig,
    LinkConfig,
    ScheduleConfig,
    VendorConfig,
    VendorStatusConfig,
    WebhookConfig,
    WeeklyResetConfig,
)

__all__ = [
    "ConfigManager",
    "AppearanceConfig",
    "LinkConfig",
    "ScheduleConfig",
    "VendorConfig",
    "VendorStatusConfig",
    "WebhookConfig",
    "WeeklyResetConfig",
]
