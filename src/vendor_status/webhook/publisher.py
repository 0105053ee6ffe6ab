"""
Discord webhook publishing for Vendor Status.

The publisher creates the status message on the first run and edits that
same message on every later run. It makes exactly one request per run and
never retries; a failure is reported as :class:`PublishError` and the next
scheduled run is the retry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

import aiohttp
import discord

from ..utils.core.exceptions import ConfigurationError, PublishError

if TYPE_CHECKING:
    from types import TracebackType


logger = logging.getLogger(__name__)


class PublishResult(NamedTuple):
    """Outcome of a publish-or-update call."""

    message_id: int
    created: bool


class WebhookPublisher:
    """Async webhook client that creates or edits one status message."""

    def __init__(
        self,
        webhook_url: str | None,
        username: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the publisher.

        Raises:
            ConfigurationError: If no webhook URL is configured
        """
        if not webhook_url:
            raise ConfigurationError(
                "Missing DISCORD_WEBHOOK_URL",
                user_message="Set the DISCORD_WEBHOOK_URL secret or webhook.url in the config file",
            )
        self.webhook_url: str = webhook_url
        self.username: str | None = username
        self.timeout: float = timeout
        self._session: aiohttp.ClientSession | None = None
        self._webhook: discord.Webhook | None = None

    async def __aenter__(self) -> WebhookPublisher:
        """Enter async context and open the HTTP session."""
        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        try:
            self._webhook = discord.Webhook.from_url(
                self.webhook_url, session=self._session
            )
        except ValueError as e:
            await self._session.close()
            self._session = None
            raise ConfigurationError(f"Invalid webhook URL format: {e}") from e
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None
        self._webhook = None

    def _require_webhook(self) -> discord.Webhook:
        if self._webhook is None:
            raise RuntimeError(
                "WebhookPublisher not initialized. Use as async context manager."
            )
        return self._webhook

    async def publish(self, embed: discord.Embed, content: str | None = None) -> int:
        """
        Create a new webhook message.

        Args:
            embed: Status embed
            content: Plain text sent alongside the embed

        Returns:
            ID of the created message

        Raises:
            PublishError: If Discord rejects the request or the transport fails
        """
        webhook = self._require_webhook()
        try:
            message = await webhook.send(
                content=content if content else discord.utils.MISSING,
                embed=embed,
                username=self.username if self.username else discord.utils.MISSING,
                wait=True,
            )
        except discord.HTTPException as e:
            raise PublishError(
                f"Webhook POST failed: {e.status}", status=e.status, context=e.text
            ) from e
        except aiohttp.ClientError as e:
            raise PublishError(f"Webhook POST failed: {e}") from e

        if message is None or not getattr(message, "id", None):
            raise PublishError("Webhook POST returned no message id")

        logger.debug("Created webhook message %d", message.id)
        return message.id

    async def update(self, message_id: int, embed: discord.Embed) -> None:
        """
        Replace the content and embed of an existing webhook message.

        The plain text content is cleared so only the embed remains.

        Raises:
            PublishError: If the message does not exist, Discord rejects the
                request or the transport fails
        """
        webhook = self._require_webhook()
        try:
            _ = await webhook.edit_message(message_id, content=None, embed=embed)
        except discord.NotFound as e:
            raise PublishError(
                f"Webhook message {message_id} not found",
                user_message="The message may have been deleted; unset DISCORD_MESSAGE_ID to post a new one",
                status=e.status,
            ) from e
        except discord.HTTPException as e:
            raise PublishError(
                f"Webhook PATCH failed: {e.status}", status=e.status, context=e.text
            ) from e
        except aiohttp.ClientError as e:
            raise PublishError(f"Webhook PATCH failed: {e}") from e

        logger.debug("Edited webhook message %d", message_id)

    async def publish_or_update(
        self,
        embed: discord.Embed,
        message_id: int | None,
        initial_content: str | None = None,
    ) -> PublishResult:
        """
        Edit ``message_id`` when one is supplied, otherwise create a message.

        Args:
            embed: Status embed
            message_id: Previously created message, or None on the first run
            initial_content: Plain text used only when creating the message

        Returns:
            PublishResult with the message ID and whether it was created
        """
        if message_id is not None:
            await self.update(message_id, embed)
            return PublishResult(message_id=message_id, created=False)

        created_id = await self.publish(embed, initial_content)
        return PublishResult(message_id=created_id, created=True)
