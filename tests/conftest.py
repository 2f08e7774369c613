"""Pytest configuration and shared fixtures for habit tracker tests.

Every test runs against a frozen clock and a temporary data directory, so
nothing touches the real ``data.json``, ``graphs/`` or log directory.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from habit_tracker import clock
from habit_tracker.clock import DAY_OFFSET, FixedClock, SystemClock
from habit_tracker.logging_config import ROOT_LOGGER_NAME
from habit_tracker.models.habit import Habit, HabitType

# Noon, so the 2-hour day offset does not move the habit day.
FROZEN_NOW = datetime(2024, 1, 10, 12, 0)
FROZEN_TODAY = date(2024, 1, 10)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point every configurable path at ``tmp_path`` and freeze the clock."""

    monkeypatch.setenv("HABIT_TRACKER_DATA_FILE", str(tmp_path / "data.json"))
    monkeypatch.setenv("HABIT_TRACKER_GRAPHS_DIR", str(tmp_path / "graphs"))
    monkeypatch.setenv("HABIT_TRACKER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("HABIT_TRACKER_DAY_OFFSET_HOURS", raising=False)
    monkeypatch.delenv("HABIT_TRACKER_DEV_MODE", raising=False)

    clock.configure(clock=FixedClock(FROZEN_NOW), offset=DAY_OFFSET)

    yield tmp_path

    clock.configure(clock=SystemClock(), offset=DAY_OFFSET)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Clock frozen at ``FROZEN_NOW`` for passing explicitly."""

    return FixedClock(FROZEN_NOW)


@pytest.fixture
def data_file(isolated_env) -> Path:
    """Path of the store file the CLI uses in tests."""

    return isolated_env / "data.json"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory():
    """Factory for creating habits with pre-recorded progress.

    Returns:
        Callable: Function that builds Habit instances
    """

    def _create_habit(
        name: str = "water",
        objectives: list[str] | None = None,
        progress: dict[date, int] | None = None,
    ) -> Habit:
        habit_type = HabitType.checklist(objectives) if objectives is not None else HabitType.numerical()
        habit = Habit.new(name, habit_type)
        habit.progress.update(progress or {})
        return habit

    return _create_habit
