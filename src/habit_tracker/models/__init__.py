"""Data model exports."""

from .habit import Habit, HabitKind, HabitType

__all__ = [
    "Habit",
    "HabitKind",
    "HabitType",
]
