"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Any, Optional

from pydantic import conint, model_validator
from sqlmodel import Field, SQLModel

from .. import clock as clock_mod
from ..clock import Clock
from ..errors import (
    ObjectiveNotFoundError,
    RedundantStateError,
    TooManyObjectivesError,
    WrongHabitTypeError,
)

_I32_MASK = 0xFFFFFFFF
_I32_SIGN = 0x80000000
I32_MIN = -(1 << 31)
I32_MAX = (1 << 31) - 1

# One bit per objective in a day's value
MAX_OBJECTIVES = 32

I32 = conint(strict=True, ge=I32_MIN, le=I32_MAX)


def wrap_i32(value: int) -> int:
    """Wrap ``value`` into the signed 32-bit range."""

    value &= _I32_MASK
    return value - (1 << 32) if value & _I32_SIGN else value


def popcount(value: int) -> int:
    """Number of set bits in the 32-bit pattern of ``value``."""

    return bin(value & _I32_MASK).count("1")


def running_total(values: list[int]) -> list[int]:
    """Running prefix sum of ``values``."""

    total = 0
    out: list[int] = []
    for value in values:
        total += value
        out.append(total)
    return out


class HabitKind(str, Enum):
    """The two kinds of habit the tool understands."""

    NUMERICAL = "Numerical"
    CHECKLIST = "Checklist"


class HabitType(SQLModel):
    """Type tag of a habit, fixed for its lifetime.

    Checklist objectives map to bit positions by index, so the list must
    never be reordered or shortened once progress has been recorded.
    """

    kind: HabitKind = HabitKind.NUMERICAL
    objectives: list[str] = Field(default_factory=list, max_length=MAX_OBJECTIVES)

    @model_validator(mode="before")
    @classmethod
    def _from_tagged(cls, data: Any) -> Any:
        """Accept the stored ``"Numerical"`` and ``{"Checklist": {...}}`` shapes."""

        if data == HabitKind.NUMERICAL.value:
            return {"kind": HabitKind.NUMERICAL}
        if isinstance(data, dict) and len(data) == 1:
            tag, body = next(iter(data.items()))
            if tag == HabitKind.NUMERICAL.value:
                return {"kind": HabitKind.NUMERICAL}
            if tag == HabitKind.CHECKLIST.value:
                if not isinstance(body, dict):
                    raise ValueError("Checklist body must be an object")
                return {**body, "kind": HabitKind.CHECKLIST}
            if tag not in cls.model_fields:
                raise ValueError(f"Unknown habit type {tag!r}")
        return data

    @classmethod
    def numerical(cls) -> "HabitType":
        return cls(kind=HabitKind.NUMERICAL)

    @classmethod
    def checklist(cls, objectives: list[str]) -> "HabitType":
        if len(objectives) > MAX_OBJECTIVES:
            raise TooManyObjectivesError(
                f"A checklist can hold at most {MAX_OBJECTIVES} objectives, got {len(objectives)}."
            )
        return cls(kind=HabitKind.CHECKLIST, objectives=list(objectives))

    def tagged(self) -> Any:
        """The stored shape of this type, inverse of the tagged parsing."""

        if self.is_checklist:
            return {HabitKind.CHECKLIST.value: {"objectives": list(self.objectives)}}
        return HabitKind.NUMERICAL.value

    @property
    def is_checklist(self) -> bool:
        return self.kind == HabitKind.CHECKLIST


class Habit(SQLModel):
    """A user-defined habit and its per-day progress.

    ``progress`` maps habit days to signed 32-bit integers. A missing day
    means zero. For checklist habits bit ``i`` of a day's value records
    whether objective ``i`` was finished that day.
    """

    name: str
    habit_type: HabitType = Field(default_factory=HabitType.numerical)
    progress: dict[date, I32] = Field(default_factory=dict)

    @classmethod
    def new(cls, name: str, habit_type: Optional[HabitType] = None) -> "Habit":
        """Create a habit with no recorded progress."""

        return cls(name=name, habit_type=habit_type or HabitType.numerical())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def is_checklist(self) -> bool:
        return self.habit_type.is_checklist

    @property
    def objectives(self) -> list[str]:
        return self.habit_type.objectives

    def progress_on(self, day: date) -> int:
        """Stored value for ``day``; zero when nothing was recorded."""

        return self.progress.get(day, 0)

    def objective_index(self, objective: str) -> int:
        """Bit position of ``objective`` in this checklist habit."""

        if not self.is_checklist:
            raise WrongHabitTypeError(f"{self.name} is not a checklist habit.")
        try:
            index = self.objectives.index(objective)
        except ValueError:
            raise ObjectiveNotFoundError(
                f"Objective '{objective}' does not exist in {self.name}."
            ) from None
        if index >= MAX_OBJECTIVES:
            raise TooManyObjectivesError(
                f"Objective '{objective}' is past the {MAX_OBJECTIVES}-objective limit of {self.name}."
            )
        return index

    def is_objective_finished(self, objective: str, day: date) -> bool:
        flag = 1 << self.objective_index(objective)
        return bool(self.progress_on(day) & flag)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_progress(self, delta: int, *, clock: Optional[Clock] = None) -> int:
        """Add ``delta`` to today's value and return the new value.

        No bounds checking: the sum wraps around like a 32-bit integer.
        """

        day = clock_mod.today(clock)
        value = wrap_i32(self.progress.get(day, 0) + delta)
        self.progress[day] = value
        return value

    def mark_objective(
        self, objective: str, finished: bool, *, clock: Optional[Clock] = None
    ) -> None:
        """Mark ``objective`` finished or unfinished for today.

        Raises if the objective already holds the requested state, so a
        repeated call is reported rather than silently ignored.
        """

        flag = 1 << self.objective_index(objective)
        day = clock_mod.today(clock)
        current = self.progress.setdefault(day, 0)
        if bool(current & flag) == finished:
            state = "finished" if finished else "unfinished"
            raise RedundantStateError(f"Objective '{objective}' already marked as {state}.")

        # The bit is known to be in the opposite state, so signed addition
        # flips exactly that bit.
        self.add_progress(flag if finished else -flag, clock=clock)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def completion_counts(self) -> list[tuple[str, int]]:
        """Per objective, the number of recorded days it was finished."""

        counts = []
        for index, objective in enumerate(self.objectives):
            flag = 1 << index
            counts.append((objective, sum(1 for value in self.progress.values() if value & flag)))
        return counts

    def display(self) -> str:
        """Human-readable multi-line summary used by ``list``."""

        lines = [f"{self.name}: "]
        if self.is_checklist:
            lines.extend(f"\t{objective}: {count}" for objective, count in self.completion_counts())
        else:
            lines.extend(
                f"\t{day.isoformat()}: {self.progress[day]}" for day in sorted(self.progress)
            )
        return "\n".join(lines)

    def daily_value(self, day: date) -> int:
        """Scalar plotted for ``day``: objectives done, or the raw value."""

        value = self.progress_on(day)
        return popcount(value) if self.is_checklist else value

    def plotting_data(
        self,
        window: timedelta,
        *,
        cumulative: bool = False,
        clock: Optional[Clock] = None,
    ) -> list[tuple[int, int]]:
        """Return ``(offset, value)`` pairs for the plotting window.

        Offsets are negated day counts ending at 0 for today, so the most
        recent day is plotted rightmost.
        """

        days = clock_mod.days_within_last(window, clock)
        values = [self.daily_value(day) for day in days]
        if cumulative:
            values = running_total(values)
        first = 1 - len(days)
        return [(first + i, value) for i, value in enumerate(values)]
