"""
Civil (wall-clock) time conversion for Vendor Status.

This module converts between absolute instants and the calendar/clock fields
observed in a named IANA timezone. Offsets are resolved through ``zoneinfo``;
all calendar arithmetic (days since epoch, weekday, field decomposition) is
done explicitly on integer seconds so the recurrence rules never depend on
``datetime`` arithmetic semantics across offset changes.

Instants are plain ``int`` counts of whole seconds since the Unix epoch.

Known limitation:
    ``TimezoneConverter.from_civil`` resolves the offset at the "fields read
    as UTC" guess and subtracts it. Inside a daylight-saving transition window
    (the skipped hour of a spring-forward, the repeated hour of a fall-back)
    the result can be off by the size of the transition and will not
    round-trip through ``to_civil``. This is accepted and not detected.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import InvalidTimezoneError

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# 1970-01-01 was a Thursday (0=Sunday..6=Saturday)
_EPOCH_WEEKDAY = 4


def days_from_civil(year: int, month: int, day: int) -> int:
    """
    Return the number of days between 1970-01-01 and the given proleptic
    Gregorian date (negative before the epoch).

    Examples:
        >>> days_from_civil(1970, 1, 1)
        0
        >>> days_from_civil(2000, 3, 1)
        11017
    """
    y = year - 1 if month <= 2 else year
    era = (y if y >= 0 else y - 399) // 400
    yoe = y - era * 400
    mp = (month + 9) % 12
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> tuple[int, int, int]:
    """
    Inverse of :func:`days_from_civil`: days since epoch to ``(year, month, day)``.

    Examples:
        >>> civil_from_days(0)
        (1970, 1, 1)
        >>> civil_from_days(11017)
        (2000, 3, 1)
    """
    z = days + 719468
    era = (z if z >= 0 else z - 146096) // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def weekday_from_date(year: int, month: int, day: int) -> int:
    """
    Weekday of a calendar date, 0=Sunday..6=Saturday.

    Examples:
        >>> weekday_from_date(1970, 1, 1)
        4
        >>> weekday_from_date(2025, 3, 4)
        2
    """
    return (days_from_civil(year, month, day) + _EPOCH_WEEKDAY) % 7


def _days_in_month(year: int, month: int) -> int:
    if month == 12:
        return days_from_civil(year + 1, 1, 1) - days_from_civil(year, 12, 1)
    return days_from_civil(year, month + 1, 1) - days_from_civil(year, month, 1)


@dataclass(frozen=True, slots=True)
class CivilTime:
    """
    Calendar/clock fields of an instant as shown on a wall clock in one timezone.

    A CivilTime does not carry its timezone; the caller always pairs it with
    the timezone name it was produced for.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")
        if not 1 <= self.day <= _days_in_month(self.year, self.month):
            raise ValueError(
                f"day {self.day} is out of range for {self.year:04d}-{self.month:02d}"
            )
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute must be in 0..59, got {self.minute}")
        if not 0 <= self.second <= 59:
            raise ValueError(f"second must be in 0..59, got {self.second}")

    @property
    def weekday(self) -> int:
        """Weekday of the civil date, 0=Sunday..6=Saturday."""
        return weekday_from_date(self.year, self.month, self.day)

    @property
    def seconds_since_midnight(self) -> int:
        """Seconds elapsed since local midnight of the civil date."""
        return (
            self.hour * SECONDS_PER_HOUR + self.minute * SECONDS_PER_MINUTE + self.second
        )

    def at(self, hour: int, minute: int = 0, second: int = 0) -> CivilTime:
        """Return the same civil date at another time of day."""
        return CivilTime(self.year, self.month, self.day, hour, minute, second)

    def as_utc_seconds(self) -> int:
        """Read the fields as if they were UTC and return seconds since epoch."""
        return (
            days_from_civil(self.year, self.month, self.day) * SECONDS_PER_DAY
            + self.seconds_since_midnight
        )

    @classmethod
    def from_utc_seconds(cls, seconds: int) -> CivilTime:
        """Decompose seconds since epoch into fields, without any offset."""
        days, remainder = divmod(seconds, SECONDS_PER_DAY)
        year, month, day = civil_from_days(days)
        hour, remainder = divmod(remainder, SECONDS_PER_HOUR)
        minute, second = divmod(remainder, SECONDS_PER_MINUTE)
        return cls(year, month, day, hour, minute, second)

    def __str__(self) -> str:
        return (
            f"{self.year:04d}-{self.month:02d}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )


class ZoneCache:
    """
    Cache of resolved ``ZoneInfo`` handles keyed by timezone name.

    One cache is owned by each :class:`TimezoneConverter`, so its lifetime is
    the lifetime of the run that created the converter.
    """

    def __init__(self) -> None:
        self._zones: dict[str, ZoneInfo] = {}

    def get(self, timezone_name: str) -> ZoneInfo:
        """
        Resolve a timezone name, reusing a previously resolved handle.

        Raises:
            InvalidTimezoneError: If the name is not a known IANA identifier
        """
        zone = self._zones.get(timezone_name)
        if zone is None:
            try:
                zone = ZoneInfo(timezone_name)
            except (ZoneInfoNotFoundError, ValueError, OSError) as e:
                raise InvalidTimezoneError(timezone_name) from e
            logger.debug("Resolved timezone %s", timezone_name)
            self._zones[timezone_name] = zone
        return zone

    def __contains__(self, timezone_name: object) -> bool:
        return timezone_name in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def clear(self) -> None:
        """Drop every cached handle."""
        self._zones.clear()


class TimezoneConverter:
    """Converts between instants and civil times in named timezones."""

    def __init__(self, cache: ZoneCache | None = None) -> None:
        self.cache: ZoneCache = cache if cache is not None else ZoneCache()

    def utc_offset(self, instant: int, timezone_name: str) -> int:
        """
        UTC offset in seconds (east positive) in effect at ``instant``.

        Raises:
            InvalidTimezoneError: If the timezone name is unknown
        """
        zone = self.cache.get(timezone_name)
        offset = datetime.fromtimestamp(instant, tz=zone).utcoffset()
        if offset is None:
            return 0
        return int(offset.total_seconds())

    def to_civil(self, instant: int, timezone_name: str) -> CivilTime:
        """
        Wall-clock fields of ``instant`` as observed in ``timezone_name``.

        Examples:
            >>> converter = TimezoneConverter()
            >>> str(converter.to_civil(0, "America/New_York"))
            '1969-12-31 19:00:00'
        """
        offset = self.utc_offset(instant, timezone_name)
        return CivilTime.from_utc_seconds(instant + offset)

    def from_civil(self, civil: CivilTime, timezone_name: str) -> int:
        """
        Instant at which a wall clock in ``timezone_name`` shows ``civil``.

        The fields are first read as UTC, the zone's offset at that guess is
        looked up, and the offset is subtracted. Near a DST transition the
        offset at the guess can differ from the offset at the answer; see the
        module docstring.

        Examples:
            >>> converter = TimezoneConverter()
            >>> converter.from_civil(CivilTime(1969, 12, 31, 19), "America/New_York")
            0
        """
        guess = civil.as_utc_seconds()
        return guess - self.utc_offset(guess, timezone_name)

    def add_days(self, civil: CivilTime, days: int, timezone_name: str) -> CivilTime:
        """
        Shift ``civil`` by ``days`` whole days of absolute time.

        The civil time is converted to an instant, moved by ``days * 86400``
        seconds and converted back, so the result reflects any offset change
        inside the shifted span.
        """
        instant = self.from_civil(civil, timezone_name)
        return self.to_civil(instant + days * SECONDS_PER_DAY, timezone_name)


def now_instant() -> int:
    """Current instant in whole seconds since the epoch."""
    return int(time.time())


def instant_from_datetime(dt: datetime) -> int:
    """
    Convert a datetime to an instant, flooring sub-second precision.

    Naive datetimes are interpreted as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())


def instant_to_datetime(instant: int) -> datetime:
    """Timezone-aware UTC datetime for an instant."""
    return datetime.fromtimestamp(instant, tz=timezone.utc)
