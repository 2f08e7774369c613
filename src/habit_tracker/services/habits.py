"""Habit service helpers for streaks."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from .. import clock
from ..models.habit import Habit


def compute_streaks(habit: Habit, *, today: Optional[date] = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) over days with positive progress.

    A checklist day counts when at least one objective was finished.
    """

    today = today or clock.today()
    done = {day for day in habit.progress if habit.daily_value(day) > 0}

    # Current streak: walk backwards from today until a gap.
    current = 0
    cursor = today
    while cursor in done:
        current += 1
        cursor -= timedelta(days=1)

    # Longest streak: sweep through sorted days, counting consecutive runs.
    longest = 0
    run = 0
    last_day: date | None = None
    for day in sorted(done):
        if last_day is not None and day == last_day + timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        last_day = day

    return current, longest


__all__ = ["compute_streaks"]
