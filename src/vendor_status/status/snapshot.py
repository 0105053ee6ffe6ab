"""
Schedule evaluation for one run.

A snapshot holds every instant the status message needs, all derived from a
single "now" so the weekly reset and each vendor window are consistent with
each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..config.schema import ScheduleConfig, VendorConfig
from ..utils.time.civil import TimezoneConverter
from ..utils.time.recurrence import Window, current_and_next_window, next_weekly_occurrence

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VendorStatus:
    """Window of one vendor at the snapshot instant."""

    name: str
    window: Window
    is_open: bool


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """All schedule data rendered in one status message."""

    now: int
    weekly_reset: int
    vendors: tuple[VendorStatus, ...]


def evaluate_vendor(
    converter: TimezoneConverter, vendor: VendorConfig, now: int
) -> VendorStatus:
    """Compute the current and next window of a single vendor."""
    window = current_and_next_window(
        converter,
        now,
        vendor.timezone,
        vendor.anchor_weekday,
        vendor.anchor_hour,
        vendor.anchor_minute,
        vendor.cycle_length,
        vendor.open_duration,
    )
    return VendorStatus(name=vendor.name, window=window, is_open=window.is_open(now))


def build_snapshot(
    schedule: ScheduleConfig,
    now: int,
    converter: TimezoneConverter | None = None,
) -> StatusSnapshot:
    """
    Evaluate the weekly reset and every configured vendor at ``now``.

    Each vendor is computed from its own configuration even when two vendors
    share the same parameters.

    Args:
        schedule: Schedule configuration
        now: Instant to evaluate at
        converter: Converter to reuse; a fresh one is created when omitted

    Returns:
        StatusSnapshot for ``now``

    Raises:
        InvalidTimezoneError: If a configured timezone cannot be resolved
    """
    if converter is None:
        converter = TimezoneConverter()

    reset = schedule.weekly_reset
    weekly_reset = next_weekly_occurrence(
        converter, now, reset.timezone, reset.weekday, reset.hour, reset.minute
    )
    vendors = tuple(evaluate_vendor(converter, vendor, now) for vendor in schedule.vendors)

    for status in vendors:
        logger.info(
            "%s is %s (window %d-%d, next opening %d)",
            status.name,
            "open" if status.is_open else "closed",
            status.window.open_start,
            status.window.close_end,
            status.window.next_open_start,
        )
    logger.info("Next weekly reset at %d", weekly_reset)

    return StatusSnapshot(now=now, weekly_reset=weekly_reset, vendors=vendors)
