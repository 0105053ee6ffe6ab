"""
Time utilities for Vendor Status.

This package provides the civil time converter, the recurrence rules built
on it, and Discord timestamp formatting.
"""

from .civil import (
    CivilTime,
    TimezoneConverter,
    ZoneCache,
    instant_from_datetime,
    instant_to_datetime,
    now_instant,
    weekday_from_date,
)
from .recurrence import (
    Weekday,
    Window,
    current_and_next_window,
    next_weekly_occurrence,
    week_anchor,
)
from .timestamps import TimestampStyle, format_for_discord, format_with_countdown

__all__ = [
    "CivilTime",
    "TimezoneConverter",
    "ZoneCache",
    "instant_from_datetime",
    "instant_to_datetime",
    "now_instant",
    "weekday_from_date",
    "Weekday",
    "Window",
    "current_and_next_window",
    "next_weekly_occurrence",
    "week_anchor",
    "TimestampStyle",
    "format_for_discord",
    "format_with_countdown",
]
