"""Core utilities shared across Vendor Status."""

from .exceptions import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    InvalidTimezoneError,
    PublishError,
    VendorStatusError,
)

__all__ = [
    "ConfigurationError",
    "ErrorCategory",
    "ErrorSeverity",
    "InvalidTimezoneError",
    "PublishError",
    "VendorStatusError",
]
