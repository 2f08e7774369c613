"""JSON file store holding the ordered list of habits."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError

from ..clock import Clock
from ..errors import HabitNotFoundError, StoreError
from ..logging_config import get_logger
from ..models.habit import Habit, HabitType

logger = get_logger("store")


def habit_to_record(habit: Habit) -> dict[str, Any]:
    """Serialize a habit into its on-disk record."""

    return {
        "progress": {day.isoformat(): value for day, value in sorted(habit.progress.items())},
        "name": habit.name,
        "habit_type": habit.habit_type.tagged(),
    }


def habit_from_record(record: Any) -> Habit:
    """Build a habit from an on-disk record, validating its shape."""

    if not isinstance(record, dict):
        raise StoreError(f"Habit record must be an object, got {type(record).__name__}.")
    try:
        return Habit.model_validate(
            {
                "name": record.get("name"),
                "habit_type": record.get("habit_type"),
                "progress": record.get("progress") or {},
            }
        )
    except ValidationError as exc:
        raise StoreError(f"Invalid habit record {record.get('name')!r}: {exc}") from exc


class HabitStore:
    """Ordered collection of habits with lookup by name.

    Names are not required to be unique; lookups return the first match.
    """

    def __init__(self, habits: Optional[Iterable[Habit]] = None):
        self.habits: list[Habit] = list(habits or [])

    def __iter__(self) -> Iterator[Habit]:
        return iter(self.habits)

    def __len__(self) -> int:
        return len(self.habits)

    # Persistence -------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "HabitStore":
        """Load the store from ``path``, creating an empty file if missing."""

        path = Path(path)
        if not path.exists():
            logger.info("Store file missing, creating empty store", extra={"path": str(path)})
            store = cls()
            store.save(path)
            return store

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise StoreError(f"Could not read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"{path} is not valid JSON: {exc}") from exc

        if not isinstance(raw, list):
            raise StoreError(f"{path} must contain a JSON list of habits.")

        store = cls(habit_from_record(record) for record in raw)
        logger.debug("Loaded store", extra={"path": str(path), "habits": len(store)})
        return store

    def save(self, path: Path) -> Path:
        """Rewrite the whole store file."""

        path = Path(path)
        payload = json.dumps([habit_to_record(h) for h in self.habits])
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(payload, encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Could not write {path}: {exc}") from exc
        logger.debug("Saved store", extra={"path": str(path), "habits": len(self.habits)})
        return path

    # Lookup ------------------------------------------------------------

    def find(self, name: str) -> Optional[Habit]:
        """Return the first habit called ``name``, if any."""

        return next((h for h in self.habits if h.name == name), None)

    def get(self, name: str) -> Habit:
        habit = self.find(name)
        if habit is None:
            raise HabitNotFoundError(f"Habit {name} doesn't seem to exist.")
        return habit

    # Mutations ---------------------------------------------------------

    def create(self, name: str, habit_type: Optional[HabitType] = None) -> Habit:
        """Append a new habit. Duplicate names are accepted."""

        habit = Habit.new(name, habit_type)
        self.habits.append(habit)
        logger.info(
            "Created habit",
            extra={"habit": name, "habit_kind": habit.habit_type.kind.value},
        )
        return habit

    def add(self, name: str, amount: int = 1, *, clock: Optional[Clock] = None) -> int:
        """Add ``amount`` to today's progress of ``name``; return the new value."""

        value = self.get(name).add_progress(amount, clock=clock)
        logger.info("Added progress", extra={"habit": name, "amount": amount, "value": value})
        return value

    def mark_objective(
        self,
        name: str,
        objective: str,
        finished: bool,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        self.get(name).mark_objective(objective, finished, clock=clock)
        logger.info(
            "Marked objective",
            extra={"habit": name, "objective": objective, "finished": finished},
        )


__all__ = ["HabitStore", "habit_from_record", "habit_to_record"]
