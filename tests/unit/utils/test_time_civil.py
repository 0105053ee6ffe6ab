"""
Tests for civil time conversion.

This module tests the calendar arithmetic helpers, the CivilTime value type,
the per-converter zone cache and instant/civil conversion in named timezones.
"""

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from vendor_status.utils.core.exceptions import ErrorCategory, InvalidTimezoneError
from vendor_status.utils.time.civil import (
    CivilTime,
    TimezoneConverter,
    ZoneCache,
    civil_from_days,
    days_from_civil,
    instant_from_datetime,
    instant_to_datetime,
    weekday_from_date,
)
from tests.utils.test_helpers import utc_instant

NEW_YORK = "America/New_York"
_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()


class TestCalendarArithmetic:
    """Test day counting and weekday derivation."""

    @pytest.mark.parametrize(
        "day",
        [
            date(1970, 1, 1),
            date(1969, 12, 31),
            date(1900, 3, 1),
            date(2000, 2, 29),
            date(2024, 2, 29),
            date(2025, 3, 4),
            date(2100, 12, 31),
        ],
    )
    def test_days_from_civil_matches_ordinal(self, day: date) -> None:
        """Test day counts agree with the proleptic Gregorian ordinal."""
        expected = day.toordinal() - _EPOCH_ORDINAL
        assert days_from_civil(day.year, day.month, day.day) == expected
        assert civil_from_days(expected) == (day.year, day.month, day.day)

    def test_weekday_numbering_starts_on_sunday(self) -> None:
        """Test weekdays are numbered 0=Sunday..6=Saturday."""
        assert weekday_from_date(2025, 3, 2) == 0  # Sunday
        assert weekday_from_date(2025, 3, 3) == 1  # Monday
        assert weekday_from_date(2025, 3, 4) == 2  # Tuesday
        assert weekday_from_date(2025, 3, 8) == 6  # Saturday

    def test_weekday_matches_calendar_over_a_year(self) -> None:
        """Test weekday derivation for every day of a leap year."""
        start = date(2024, 1, 1).toordinal()
        for ordinal in range(start, start + 366):
            day = date.fromordinal(ordinal)
            assert weekday_from_date(day.year, day.month, day.day) == day.isoweekday() % 7


class TestCivilTime:
    """Test the CivilTime value type."""

    def test_invalid_fields_rejected(self) -> None:
        """Test out-of-range fields raise ValueError."""
        with pytest.raises(ValueError, match="out of range"):
            _ = CivilTime(2025, 2, 29)
        with pytest.raises(ValueError, match="month"):
            _ = CivilTime(2025, 13, 1)
        with pytest.raises(ValueError, match="hour"):
            _ = CivilTime(2025, 1, 1, 24)

    def test_leap_day_accepted(self) -> None:
        """Test February 29th is valid in leap years."""
        assert CivilTime(2024, 2, 29).weekday == 4  # Thursday

    def test_seconds_since_midnight(self) -> None:
        """Test time of day in seconds."""
        assert CivilTime(2025, 3, 4, 3, 30, 15).seconds_since_midnight == 12615

    def test_at_replaces_time_of_day(self) -> None:
        """Test at() keeps the date and replaces the clock fields."""
        civil = CivilTime(2025, 3, 4, 17, 45, 12)
        assert civil.at(3, 30) == CivilTime(2025, 3, 4, 3, 30, 0)

    def test_utc_seconds_round_trip(self) -> None:
        """Test reading fields as UTC and decomposing them again."""
        civil = CivilTime(1969, 7, 20, 20, 17, 40)
        seconds = civil.as_utc_seconds()
        assert seconds == utc_instant(1969, 7, 20, 20, 17, 40)
        assert CivilTime.from_utc_seconds(seconds) == civil

    def test_str(self) -> None:
        """Test the human readable representation."""
        assert str(CivilTime(2025, 3, 4, 3, 5, 9)) == "2025-03-04 03:05:09"


class TestZoneCache:
    """Test timezone handle caching."""

    def test_handles_are_reused(self) -> None:
        """Test the same handle is returned for repeated lookups."""
        cache = ZoneCache()
        first = cache.get(NEW_YORK)
        second = cache.get(NEW_YORK)

        assert first is second
        assert isinstance(first, ZoneInfo)
        assert NEW_YORK in cache
        assert len(cache) == 1

    def test_caches_are_independent(self) -> None:
        """Test each cache only holds what it resolved itself."""
        first = ZoneCache()
        second = ZoneCache()
        _ = first.get("Europe/Berlin")

        assert "Europe/Berlin" in first
        assert "Europe/Berlin" not in second

    def test_clear(self) -> None:
        """Test clearing the cache."""
        cache = ZoneCache()
        _ = cache.get("UTC")
        cache.clear()
        assert len(cache) == 0

    def test_unknown_timezone_raises(self) -> None:
        """Test unknown identifiers raise InvalidTimezoneError."""
        cache = ZoneCache()
        with pytest.raises(InvalidTimezoneError) as exc_info:
            _ = cache.get("Mars/Olympus_Mons")

        assert exc_info.value.timezone_name == "Mars/Olympus_Mons"
        assert exc_info.value.category == ErrorCategory.TIMEZONE
        assert exc_info.value.recoverable is False
        assert "Mars/Olympus_Mons" not in cache


class TestToCivil:
    """Test instant to civil time conversion."""

    def test_new_york_winter(self, converter: TimezoneConverter) -> None:
        """Test conversion under standard time (UTC-5)."""
        civil = converter.to_civil(utc_instant(2025, 3, 4, 9, 0), NEW_YORK)
        assert civil == CivilTime(2025, 3, 4, 4, 0, 0)
        assert civil.weekday == 2

    def test_new_york_summer(self, converter: TimezoneConverter) -> None:
        """Test conversion under daylight saving time (UTC-4)."""
        civil = converter.to_civil(utc_instant(2025, 7, 4, 16, 30, 5), NEW_YORK)
        assert civil == CivilTime(2025, 7, 4, 12, 30, 5)

    def test_same_instant_different_zones(self, converter: TimezoneConverter) -> None:
        """Test one instant yields different civil times in different zones."""
        instant = utc_instant(2025, 3, 4, 9, 0)

        honolulu = converter.to_civil(instant, "Pacific/Honolulu")
        kolkata = converter.to_civil(instant, "Asia/Kolkata")

        assert honolulu == CivilTime(2025, 3, 3, 23, 0, 0)
        assert honolulu.weekday == 1
        assert kolkata == CivilTime(2025, 3, 4, 14, 30, 0)
        assert kolkata.weekday == 2

    def test_before_epoch(self, converter: TimezoneConverter) -> None:
        """Test negative instants."""
        assert converter.to_civil(0, NEW_YORK) == CivilTime(1969, 12, 31, 19, 0, 0)
        assert converter.to_civil(-1, "UTC") == CivilTime(1969, 12, 31, 23, 59, 59)

    def test_weekday_matches_zoneinfo(self, converter: TimezoneConverter) -> None:
        """Test the derived weekday agrees with the local calendar date."""
        zone = ZoneInfo("Australia/Sydney")
        start = utc_instant(2025, 1, 1)
        for step in range(0, 400):
            instant = start + step * 77777
            expected = datetime.fromtimestamp(instant, tz=zone)
            civil = converter.to_civil(instant, "Australia/Sydney")
            assert civil.weekday == expected.isoweekday() % 7
            assert (civil.year, civil.month, civil.day) == (
                expected.year,
                expected.month,
                expected.day,
            )

    def test_unknown_timezone(self, converter: TimezoneConverter) -> None:
        """Test unknown timezones propagate InvalidTimezoneError."""
        with pytest.raises(InvalidTimezoneError):
            _ = converter.to_civil(0, "Not/A_Zone")

    def test_utc_offset(self, converter: TimezoneConverter) -> None:
        """Test the offset follows seasonal changes."""
        assert converter.utc_offset(utc_instant(2025, 3, 4, 9), NEW_YORK) == -5 * 3600
        assert converter.utc_offset(utc_instant(2025, 3, 11, 9), NEW_YORK) == -4 * 3600
        assert converter.utc_offset(utc_instant(2025, 3, 4, 9), "Asia/Kolkata") == 19800


class TestFromCivil:
    """Test civil time to instant conversion."""

    def test_standard_time(self, converter: TimezoneConverter) -> None:
        """Test conversion of a winter wall-clock time."""
        instant = converter.from_civil(CivilTime(2025, 3, 4, 3, 30), NEW_YORK)
        assert instant == utc_instant(2025, 3, 4, 8, 30)

    def test_daylight_time(self, converter: TimezoneConverter) -> None:
        """Test conversion of a summer wall-clock time."""
        instant = converter.from_civil(CivilTime(2025, 3, 11, 3, 30), NEW_YORK)
        assert instant == utc_instant(2025, 3, 11, 7, 30)

    @pytest.mark.parametrize(
        "timezone_name",
        ["UTC", NEW_YORK, "Europe/Berlin", "Asia/Kolkata", "Australia/Sydney"],
    )
    @pytest.mark.parametrize(
        "instant",
        [
            0,
            utc_instant(2024, 2, 29, 23, 59, 59),
            utc_instant(2025, 1, 15, 12, 0, 0),
            utc_instant(2025, 7, 4, 18, 30, 15),
            utc_instant(2025, 12, 31, 23, 0, 0),
        ],
    )
    def test_round_trip_outside_transitions(
        self, converter: TimezoneConverter, timezone_name: str, instant: int
    ) -> None:
        """Test from_civil(to_civil(t)) == t away from DST transitions."""
        civil = converter.to_civil(instant, timezone_name)
        assert converter.from_civil(civil, timezone_name) == instant

    def test_skipped_hour_maps_forward(self, converter: TimezoneConverter) -> None:
        """Test a wall-clock time inside the spring-forward gap.

        02:30 on 2025-03-09 does not exist in New York; the offset guessed
        from the UTC reading is still standard time, so the result lands at
        03:30 daylight time.
        """
        instant = converter.from_civil(CivilTime(2025, 3, 9, 2, 30), NEW_YORK)

        assert instant == utc_instant(2025, 3, 9, 7, 30)
        assert converter.to_civil(instant, NEW_YORK) == CivilTime(2025, 3, 9, 3, 30)


class TestAddDays:
    """Test day shifting through the timezone."""

    def test_zero_days(self, converter: TimezoneConverter) -> None:
        """Test adding zero days is the identity outside transitions."""
        civil = CivilTime(2025, 3, 4, 4, 0)
        assert converter.add_days(civil, 0, NEW_YORK) == civil

    def test_negative_days(self, converter: TimezoneConverter) -> None:
        """Test moving backwards."""
        civil = CivilTime(2025, 3, 4, 4, 0)
        assert converter.add_days(civil, -7, NEW_YORK) == CivilTime(2025, 2, 25, 4, 0)

    def test_month_and_year_rollover(self, converter: TimezoneConverter) -> None:
        """Test rolling over month, year and leap day boundaries."""
        assert converter.add_days(CivilTime(2024, 12, 31, 10), 1, "UTC") == CivilTime(
            2025, 1, 1, 10
        )
        assert converter.add_days(CivilTime(2024, 2, 28), 1, "UTC") == CivilTime(
            2024, 2, 29
        )

    def test_reflects_offset_change(self, converter: TimezoneConverter) -> None:
        """Test a shift across spring-forward is 24 hours of absolute time."""
        shifted = converter.add_days(CivilTime(2025, 3, 8, 12, 0), 1, NEW_YORK)
        assert shifted == CivilTime(2025, 3, 9, 13, 0)


class TestInstantHelpers:
    """Test datetime interop helpers."""

    def test_instant_from_aware_datetime(self) -> None:
        """Test aware datetimes convert by their own offset."""
        dt = datetime(2025, 3, 4, 4, 0, tzinfo=ZoneInfo(NEW_YORK))
        assert instant_from_datetime(dt) == utc_instant(2025, 3, 4, 9, 0)

    def test_instant_from_naive_datetime_is_utc(self) -> None:
        """Test naive datetimes are read as UTC."""
        assert instant_from_datetime(datetime(2025, 3, 4, 9, 0)) == utc_instant(
            2025, 3, 4, 9, 0
        )

    def test_sub_second_precision_is_floored(self) -> None:
        """Test fractional seconds are dropped."""
        dt = datetime(2025, 3, 4, 9, 0, 0, 999999, tzinfo=timezone.utc)
        assert instant_from_datetime(dt) == utc_instant(2025, 3, 4, 9, 0)

    def test_instant_to_datetime(self) -> None:
        """Test instants become aware UTC datetimes."""
        dt = instant_to_datetime(utc_instant(2025, 3, 4, 9, 0))
        assert dt == datetime(2025, 3, 4, 9, 0, tzinfo=timezone.utc)
        assert dt.tzinfo is timezone.utc
