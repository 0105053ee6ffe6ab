"""
Basic exception classes for Vendor Status.

This module contains the exception hierarchy shared by the schedule core,
the configuration layer and the webhook publisher, kept free of imports from
the rest of the package to avoid import cycles.
"""

from __future__ import annotations

from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors for appropriate handling strategies."""

    NETWORK = "network"
    API = "api"
    TIMEZONE = "timezone"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    DISCORD = "discord"
    UNKNOWN = "unknown"


class VendorStatusError(Exception):
    """Base exception class for Vendor Status specific errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        user_message: str | None = None,
        context: object | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.category: ErrorCategory = category
        self.severity: ErrorSeverity = severity
        self.user_message: str = user_message or message
        self.context: object | None = context
        self.recoverable: bool = recoverable


class InvalidTimezoneError(VendorStatusError):
    """Raised when a timezone name is not a recognised IANA identifier."""

    def __init__(
        self,
        timezone_name: str,
        context: object | None = None,
    ) -> None:
        super().__init__(
            f"Unknown timezone identifier: {timezone_name!r}",
            category=ErrorCategory.TIMEZONE,
            severity=ErrorSeverity.CRITICAL,
            recoverable=False,
            context=context,
        )
        self.timezone_name: str = timezone_name


class ConfigurationError(VendorStatusError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.HIGH,
            recoverable=False,
            user_message=user_message,
            context=context,
        )


class PublishError(VendorStatusError):
    """Webhook create/edit failures (Discord API and transport errors)."""

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: object | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(
            message,
            category=ErrorCategory.DISCORD,
            severity=ErrorSeverity.HIGH,
            user_message=user_message,
            context=context,
            recoverable=True,
        )
        self.status: int | None = status
