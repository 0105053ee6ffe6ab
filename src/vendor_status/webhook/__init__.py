"""Discord webhook publishing."""

from .publisher import PublishResult, WebhookPublisher

__all__ = ["PublishResult", "WebhookPublisher"]
