"""Chart rendering for habit progress."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..clock import Clock
from ..errors import ChartError, DateWindowError
from ..logging_config import get_logger
from ..models.habit import Habit

logger = get_logger("charts")

# 1600x900 pixels
FIGSIZE = (16, 9)
DPI = 100

LINE_COLOR = "#EF4444"
POINT_COLOR = "#22C55E"

# Longest window the plot command accepts
MAX_PLOT_DAYS = 36500

# Label every day up to this many points
MAX_DAILY_TICKS = 31


def _caption(habit: Habit, cumulative: bool) -> str:
    if habit.is_checklist:
        return "Total Goals Completed" if cumulative else "Num Goals Completed by Day"
    return "Total Progress" if cumulative else "Progress by Day"


def build_habit_chart(
    habit: Habit,
    days: int,
    *,
    cumulative: bool = False,
    clock: Optional[Clock] = None,
) -> Figure:
    """Create a line chart of the last ``days`` habit days, today at x=0."""

    try:
        window = timedelta(days=days)
    except OverflowError:
        raise DateWindowError(f"{days} days is too long a window to plot.") from None
    points = habit.plotting_data(window, cumulative=cumulative, clock=clock)
    offsets = [offset for offset, _ in points]
    values = [value for _, value in points]

    fig, ax = plt.subplots(figsize=FIGSIZE, dpi=DPI)
    fig.patch.set_facecolor("white")
    ax.set_facecolor("white")

    if points:
        ax.plot(offsets, values, color=LINE_COLOR, linewidth=2.5)
        ax.scatter(offsets, values, color=POINT_COLOR, s=60, zorder=3)
        if len(offsets) > 1:
            ax.set_xlim(offsets[0], 0)
        if len(offsets) <= MAX_DAILY_TICKS:
            ax.set_xticks(offsets)
        else:
            ax.xaxis.set_major_locator(mticker.MaxNLocator(integer=True))

    low = min([0, *values])
    if habit.is_checklist and not cumulative:
        high = max([len(habit.objectives), *values])
    else:
        high = max([0, *values])
    ax.set_ylim(low, high if high > low else low + 1)
    ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(_caption(habit, cumulative), fontsize=24, pad=15)
    ax.set_xlabel("Days ago", fontsize=14)
    ax.set_ylabel("Objectives" if habit.is_checklist else "Progress", fontsize=14)
    return fig


def render_habit_chart(
    habit: Habit,
    days: int,
    output_dir: Path,
    *,
    cumulative: bool = False,
    clock: Optional[Clock] = None,
) -> Path:
    """Render the habit's chart to ``<output_dir>/<name>.png`` and return the path."""

    output_path = Path(output_dir) / f"{habit.name}.png"
    fig = build_habit_chart(habit, days, cumulative=cumulative, clock=clock)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=DPI, facecolor="white")
    except (OSError, ValueError) as exc:
        raise ChartError(f"Could not render chart for {habit.name}: {exc}") from exc
    finally:
        plt.close(fig)

    logger.info(
        "Rendered chart",
        extra={"habit": habit.name, "days": days, "cumulative": cumulative, "path": str(output_path)},
    )
    return output_path


__all__ = ["MAX_PLOT_DAYS", "build_habit_chart", "render_habit_chart"]
