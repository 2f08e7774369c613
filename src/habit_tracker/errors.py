"""Exceptions raised by the habit tracker."""

from __future__ import annotations


class HabitTrackerError(Exception):
    """Base class for every error the tool reports to the user."""


class MissingArgumentError(HabitTrackerError):
    """A command was invoked without a required argument."""


class UnknownHabitTypeError(HabitTrackerError):
    """The habit type keyword is neither numerical nor checklist."""


class UnknownCommandError(HabitTrackerError):
    """The command name is not recognised."""


class HabitNotFoundError(HabitTrackerError, LookupError):
    """No habit with the requested name exists in the store."""


class ObjectiveNotFoundError(HabitTrackerError, LookupError):
    """The objective is not part of the checklist habit."""


class WrongHabitTypeError(HabitTrackerError):
    """A checklist-only action was requested on a numerical habit."""


class RedundantStateError(HabitTrackerError):
    """The objective already holds the requested finished state."""


class StoreError(HabitTrackerError):
    """The habit store file could not be read, parsed or written."""


class TooManyObjectivesError(HabitTrackerError):
    """A checklist has more objectives than a day's 32-bit value can hold."""


class DateWindowError(HabitTrackerError, ValueError):
    """A day window reaches past the representable calendar."""


class ChartError(HabitTrackerError):
    """The progress chart could not be rendered."""


__all__ = [
    "ChartError",
    "DateWindowError",
    "HabitNotFoundError",
    "HabitTrackerError",
    "MissingArgumentError",
    "ObjectiveNotFoundError",
    "RedundantStateError",
    "StoreError",
    "TooManyObjectivesError",
    "UnknownCommandError",
    "UnknownHabitTypeError",
    "WrongHabitTypeError",
]
