"""
Discord timestamp formatting for Vendor Status.

Discord renders ``<t:UNIX:STYLE>`` markup in each reader's own timezone, so
instants are handed over untouched and only the style is chosen here.
"""

from typing import Literal

import discord

from .civil import instant_to_datetime


# Type alias for Discord timestamp styles
TimestampStyle = Literal["t", "T", "d", "D", "f", "F", "R"]


def format_for_discord(instant: int, style: TimestampStyle = "F") -> str:
    """
    Format an instant as a Discord timestamp.

    Args:
        instant: Seconds since the epoch
        style: Discord timestamp style (default: 'F' for full date/time)

    Returns:
        Formatted Discord timestamp string

    Examples:
        >>> format_for_discord(1735689600)
        '<t:1735689600:F>'
        >>> format_for_discord(1735689600, "R")
        '<t:1735689600:R>'
    """
    return discord.utils.format_dt(instant_to_datetime(instant), style=style)


def format_with_countdown(
    instant: int,
    absolute_style: TimestampStyle = "F",
    separator: str = " — ",
) -> str:
    """
    Absolute timestamp followed by a relative countdown to the same instant.

    Examples:
        >>> format_with_countdown(1735689600)
        '<t:1735689600:F> — <t:1735689600:R>'
    """
    return (
        f"{format_for_discord(instant, absolute_style)}"
        f"{separator}{format_for_discord(instant, 'R')}"
    )
