"""
Status message rendering for Vendor Status.

Turns a :class:`StatusSnapshot` into the Discord embed posted by the
webhook. All times are emitted as Discord timestamp markup so each reader
sees them in their own timezone, with a live relative countdown next to each.
"""

from collections.abc import Sequence

import discord

from ..config.schema import AppearanceConfig, LinkConfig
from ..utils.time.timestamps import format_with_countdown
from .snapshot import StatusSnapshot, VendorStatus


def weekly_reset_section(snapshot: StatusSnapshot) -> str:
    """Heading and next-reset line for the weekly reset."""
    return (
        "**Weekly Vendor Reset**\n"
        f"Next reset: {format_with_countdown(snapshot.weekly_reset)}"
    )


def vendor_lines(status: VendorStatus) -> str:
    """
    Two lines describing a vendor window.

    An open vendor shows when it closes and when it opens again; a closed
    vendor shows when it opens and when that next window closes.
    """
    window = status.window
    if status.is_open:
        return (
            f"**OPEN** — Closes: {format_with_countdown(window.close_end)}\n"
            f"Next open: {format_with_countdown(window.next_open_start)}"
        )
    return (
        f"Opens: {format_with_countdown(window.next_open_start)}\n"
        f"Next closes: {format_with_countdown(window.next_close_end)}"
    )


def links_section(links: Sequence[LinkConfig]) -> str:
    """Bullet list of useful links."""
    bullets = "\n".join(f"• {link.label}: {link.url}" for link in links)
    return f"**Useful links**\n{bullets}"


def build_description(snapshot: StatusSnapshot, links: Sequence[LinkConfig] = ()) -> str:
    """
    Build the full embed description.

    Examples:
        >>> from vendor_status.status.snapshot import StatusSnapshot
        >>> snapshot = StatusSnapshot(now=0, weekly_reset=3600, vendors=())
        >>> print(build_description(snapshot))
        **Weekly Vendor Reset**
        Next reset: <t:3600:F> — <t:3600:R>
    """
    sections = [weekly_reset_section(snapshot)]
    sections.extend(
        f"\n**{status.name}**\n{vendor_lines(status)}" for status in snapshot.vendors
    )
    if links:
        sections.append("\n" + links_section(links))
    return "\n".join(sections)


def build_status_embed(
    snapshot: StatusSnapshot,
    appearance: AppearanceConfig,
    links: Sequence[LinkConfig] = (),
) -> discord.Embed:
    """
    Create the status embed.

    Args:
        snapshot: Evaluated schedules
        appearance: Title, color and footer settings
        links: Links listed at the end of the description

    Returns:
        Embed ready to send or edit through the webhook
    """
    embed = discord.Embed(
        title=appearance.title,
        description=build_description(snapshot, links),
        color=discord.Color(appearance.color_value),
    )
    _ = embed.set_footer(text=appearance.footer)
    return embed
