"""Personal habit tracker for the command line."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .context import create_app_context
from .models.habit import Habit, HabitType
from .services.store import HabitStore

__all__ = ["BaseConfig", "DevConfig", "Habit", "HabitStore", "HabitType", "create_app_context"]
