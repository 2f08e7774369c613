"""Habit-day resolution.

A habit day ends at 02:00 local time rather than midnight, so progress
logged shortly after midnight still counts for the evening before. Every
progress key in the store is a habit day.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Protocol

from .errors import DateWindowError

DAY_OFFSET = timedelta(hours=2)


class Clock(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:  # pragma: no cover - interface
        ...


class SystemClock:
    """Wall-clock time in the local timezone."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """Clock frozen at a given moment, for tests and backfilling."""

    def __init__(self, moment: datetime) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


_default_clock: Clock = SystemClock()
_default_offset: timedelta = DAY_OFFSET


def configure(*, clock: Optional[Clock] = None, offset: Optional[timedelta] = None) -> None:
    """Replace the process-wide clock and/or day offset."""

    global _default_clock, _default_offset  # noqa: PLW0603
    if clock is not None:
        _default_clock = clock
    if offset is not None:
        _default_offset = offset


def _shifted_now(clock: Optional[Clock], offset: Optional[timedelta]) -> datetime:
    clock = clock or _default_clock
    offset = _default_offset if offset is None else offset
    return clock.now() - offset


def today(clock: Optional[Clock] = None, offset: Optional[timedelta] = None) -> date:
    """Return the habit day that "now" belongs to."""

    return _shifted_now(clock, offset).date()


def days_within_last(
    duration: timedelta,
    clock: Optional[Clock] = None,
    offset: Optional[timedelta] = None,
) -> list[date]:
    """Return every habit day from ``today - duration`` through today, ascending.

    A seven-day duration therefore yields eight dates. A negative duration
    yields an empty list. Windows reaching past year 1 raise
    ``DateWindowError``.
    """

    shifted = _shifted_now(clock, offset)
    end = shifted.date()
    try:
        cursor = (shifted - duration).date()
    except OverflowError:
        raise DateWindowError(
            f"Cannot look back {duration.days} days from {end.isoformat()}."
        ) from None
    days: list[date] = []
    while cursor <= end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days


__all__ = [
    "DAY_OFFSET",
    "Clock",
    "FixedClock",
    "SystemClock",
    "configure",
    "days_within_last",
    "today",
]
