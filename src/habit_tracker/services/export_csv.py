"""CSV export helpers for habit progress."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..models.habit import Habit

HEADERS = ["habit", "habit_type", "date", "value"]


def export_progress_csv(*, habits: Iterable[Habit], output_path: Path) -> Path:
    """Write every recorded day of every habit to CSV at ``output_path``.

    Rows follow store order, then ascending date. Checklist values are the
    raw bit fields. Returns the path written.
    """

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for habit in habits:
            for day in sorted(habit.progress):
                writer.writerow(
                    {
                        "habit": habit.name,
                        "habit_type": habit.habit_type.kind.value,
                        "date": day.isoformat(),
                        "value": habit.progress[day],
                    }
                )

    return output_path


__all__ = ["HEADERS", "export_progress_csv"]
