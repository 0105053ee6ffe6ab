"""
Recurrence rules built on the civil time converter.

Two independent rules are provided:

* :func:`next_weekly_occurrence` - the next instant a wall clock in a given
  timezone shows a given weekday and time of day (the weekly reset).
* :func:`current_and_next_window` - a fixed-period open/closed cycle whose
  anchor is placed on a weekday/time in a timezone once per week, after which
  the cycle repeats on pure fixed-duration arithmetic (vendor rotations).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum

from .civil import SECONDS_PER_HOUR, SECONDS_PER_MINUTE, CivilTime, TimezoneConverter

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


class Weekday(IntEnum):
    """Day of week numbered 0=Sunday..6=Saturday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def parse(cls, value: str | int) -> Weekday:
        """
        Parse a weekday from its name, a three-letter abbreviation or its number.

        Examples:
            >>> Weekday.parse("tuesday")
            <Weekday.TUESDAY: 2>
            >>> Weekday.parse("Wed")
            <Weekday.WEDNESDAY: 3>
            >>> Weekday.parse(0)
            <Weekday.SUNDAY: 0>
        """
        if isinstance(value, bool):
            raise ValueError(f"Invalid weekday: {value!r}")
        if isinstance(value, int):
            return cls(value)
        name = value.strip().upper()
        if name.isdigit():
            return cls(int(name))
        for member in cls:
            if member.name == name or member.name[:3] == name:
                return member
        raise ValueError(f"Invalid weekday: {value!r}")


@dataclass(frozen=True, slots=True)
class Window:
    """
    Current occurrence of an open/closed cycle and the start of its successor.

    All four fields are instants (seconds since epoch).
    """

    open_start: int
    close_end: int
    next_open_start: int
    next_close_end: int

    def is_open(self, now: int) -> bool:
        """True while ``now`` lies in ``[open_start, close_end)``."""
        return self.open_start <= now < self.close_end

    @property
    def open_duration(self) -> int:
        return self.close_end - self.open_start

    @property
    def cycle_length(self) -> int:
        return self.next_open_start - self.open_start


def _shift_date(
    converter: TimezoneConverter, civil: CivilTime, days: int, timezone_name: str
) -> CivilTime:
    # Shifting from local noon keeps the calendar date stable when an offset
    # change falls inside the shifted span.
    if days == 0:
        return civil
    return converter.add_days(civil.at(12), days, timezone_name)


def next_weekly_occurrence(
    converter: TimezoneConverter,
    now: int,
    timezone_name: str,
    target_weekday: int,
    hour: int,
    minute: int,
) -> int:
    """
    Next instant at which ``timezone_name`` shows ``target_weekday`` at ``hour:minute``.

    When today is the target weekday and the local time is at or past the
    target time, the occurrence is considered passed and next week's is
    returned.

    Args:
        converter: Converter used for all civil time resolution
        now: Current instant
        timezone_name: IANA timezone the rule is anchored in
        target_weekday: 0=Sunday..6=Saturday
        hour: Target hour, local time
        minute: Target minute, local time

    Returns:
        Instant of the next occurrence (seconds are always zero)

    Raises:
        InvalidTimezoneError: If the timezone name is unknown
    """
    current = converter.to_civil(now, timezone_name)
    delta = (target_weekday - current.weekday + DAYS_PER_WEEK) % DAYS_PER_WEEK

    if delta == 0:
        target_seconds = hour * SECONDS_PER_HOUR + minute * SECONDS_PER_MINUTE
        if current.seconds_since_midnight >= target_seconds:
            delta = DAYS_PER_WEEK

    target_date = _shift_date(converter, current, delta, timezone_name)
    occurrence = converter.from_civil(target_date.at(hour, minute, 0), timezone_name)

    logger.debug(
        "Next weekly occurrence in %s: %s (delta=%d days)",
        timezone_name,
        target_date.at(hour, minute, 0),
        delta,
    )
    return occurrence


def week_anchor(
    converter: TimezoneConverter,
    now: int,
    timezone_name: str,
    anchor_weekday: int,
    anchor_hour: int,
    anchor_minute: int,
) -> int:
    """
    Most recent weekly anchor at or before ``now``.

    The anchor is placed on ``anchor_weekday`` at ``anchor_hour:anchor_minute``
    of the civil week (Monday to Sunday) containing ``now``. If ``now`` comes
    before that, the same wall-clock time one calendar week earlier is used.
    """
    current = converter.to_civil(now, timezone_name)
    days_since_monday = (current.weekday - Weekday.MONDAY) % DAYS_PER_WEEK
    monday = _shift_date(converter, current, -days_since_monday, timezone_name)

    days_to_anchor = (anchor_weekday - Weekday.MONDAY) % DAYS_PER_WEEK
    anchor_date = _shift_date(converter, monday, days_to_anchor, timezone_name)
    anchor = converter.from_civil(
        anchor_date.at(anchor_hour, anchor_minute, 0), timezone_name
    )

    if now < anchor:
        anchor_date = _shift_date(
            converter, anchor_date, -DAYS_PER_WEEK, timezone_name
        )
        anchor = converter.from_civil(
            anchor_date.at(anchor_hour, anchor_minute, 0), timezone_name
        )

    return anchor


def current_and_next_window(
    converter: TimezoneConverter,
    now: int,
    timezone_name: str,
    anchor_weekday: int,
    anchor_hour: int,
    anchor_minute: int,
    cycle_length: int,
    open_duration: int,
) -> Window:
    """
    Current and next open windows of a fixed-period cycle.

    The anchor's position is calendar-aware (see :func:`week_anchor`); from the
    anchor on, windows repeat every ``cycle_length`` seconds of absolute time
    and stay open for ``open_duration`` seconds.

    Args:
        converter: Converter used for all civil time resolution
        now: Current instant
        timezone_name: IANA timezone the anchor is placed in
        anchor_weekday: 0=Sunday..6=Saturday
        anchor_hour: Anchor hour, local time
        anchor_minute: Anchor minute, local time
        cycle_length: Seconds from one opening to the next
        open_duration: Seconds each window stays open

    Returns:
        Window containing or immediately preceding ``now`` and its successor

    Raises:
        ValueError: If the durations are not ``0 < open_duration < cycle_length``
        InvalidTimezoneError: If the timezone name is unknown
    """
    if cycle_length <= 0:
        raise ValueError(f"cycle_length must be positive, got {cycle_length}")
    if not 0 < open_duration < cycle_length:
        raise ValueError(
            f"open_duration must be between 0 and cycle_length ({cycle_length}), "
            f"got {open_duration}"
        )

    anchor = week_anchor(
        converter, now, timezone_name, anchor_weekday, anchor_hour, anchor_minute
    )
    k = (now - anchor) // cycle_length

    open_start = anchor + k * cycle_length
    next_open_start = open_start + cycle_length
    return Window(
        open_start=open_start,
        close_end=open_start + open_duration,
        next_open_start=next_open_start,
        next_close_end=next_open_start + open_duration,
    )
