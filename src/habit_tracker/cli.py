"""Command-line interface for the habit tracker."""

from __future__ import annotations

import functools
from pathlib import Path
from typing import Optional

import click

from .context import AppContext, create_app_context
from .errors import (
    HabitTrackerError,
    MissingArgumentError,
    UnknownCommandError,
    UnknownHabitTypeError,
)
from .logging_config import get_logger
from .models.habit import I32_MAX, I32_MIN, HabitType
from .services.charts import MAX_PLOT_DAYS, render_habit_chart
from .services.export_csv import export_progress_csv
from .services.habits import compute_streaks

logger = get_logger("cli")

USAGE = """
habit_tracker:

    h(elp):
Print this message.

    l(ist):
List all habits in the database.

    c(reate) name [type] [objective 1]...:
Creates a habit. Type can be c(hecklist) or n(umerical). If a checklist habit, the objectives must be specified. Default numerical.

    a(dd) name [progress]:
Adds progress to a habit. Progress defaults to 1.

    f(inish) name objective:
Finishes an objective of a checklist habit.

    unf(inish) name objective:
Unfinishes an objective of a checklist habit.

    p(lot) name [days] [--cumulative]:
Plots the progress of the habit over the past [days] days. Days defaults to 7. Saves the graph at graphs/[name].png

    s(tats) name:
Prints the current and longest streak of a habit.

    e(xport) [path]:
Writes every habit's daily progress to a CSV file. Path defaults to habits.csv.
"""

ALIASES = {
    "h": "help",
    "l": "list",
    "c": "create",
    "a": "add",
    "f": "finish",
    "unf": "unfinish",
    "p": "plot",
    "s": "stats",
    "e": "export",
}

# Errors that mean the command line itself was wrong.
USAGE_ERRORS = (MissingArgumentError, UnknownHabitTypeError, UnknownCommandError)


def _to_click_error(exc: HabitTrackerError) -> click.ClickException:
    logger.info(
        "Command failed: %s", exc, extra={"error_type": type(exc).__name__}
    )
    if isinstance(exc, USAGE_ERRORS):
        return click.UsageError(str(exc), click.get_current_context(silent=True))
    return click.ClickException(str(exc))


def reports_errors(func):
    """Turn domain errors raised by a command into click errors."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HabitTrackerError as exc:
            raise _to_click_error(exc) from exc

    return wrapper


class AliasedGroup(click.Group):
    """Group that accepts short command aliases and prints usage on typos."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        return super().get_command(ctx, ALIASES.get(cmd_name, cmd_name))

    def resolve_command(self, ctx: click.Context, args: list[str]):
        name = args[0]
        command = self.get_command(ctx, name)
        if command is None and not ctx.resilient_parsing:
            click.echo(USAGE)
            raise _to_click_error(UnknownCommandError(f"Didn't understand command '{name}'."))
        return (command.name if command else None), command, args[1:]


def parse_habit_type(keyword: Optional[str], objectives: tuple[str, ...]) -> HabitType:
    """Translate the ``create`` type keyword into a habit type."""

    if keyword is None or keyword in ("n", "numerical"):
        return HabitType.numerical()
    if keyword in ("c", "checklist"):
        return HabitType.checklist(list(objectives))
    raise UnknownHabitTypeError(
        f"'{keyword}' is not a type of habit. Please enter n(umerical) or c(hecklist)"
    )


def _require(value: Optional[str], message: str) -> str:
    if value is None:
        raise MissingArgumentError(message)
    return value


@click.group(cls=AliasedGroup, invoke_without_command=True)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Habit store to use instead of the configured data.json.",
)
@click.pass_context
def cli(ctx: click.Context, data_file: Optional[Path]) -> None:
    """Track daily habits from the command line."""

    if ctx.invoked_subcommand is None:
        click.echo(USAGE)
        return
    try:
        ctx.obj = create_app_context(data_file=data_file)
    except HabitTrackerError as exc:
        raise _to_click_error(exc) from exc


@cli.command("help")
def help_command() -> None:
    """Print usage text."""

    click.echo(USAGE)


@cli.command("list")
@click.pass_obj
def list_command(app: AppContext) -> None:
    """List all habits."""

    for habit in app.store:
        click.echo(habit.display())


@cli.command("create")
@click.argument("name", required=False)
@click.argument("habit_type", required=False)
@click.argument("objectives", nargs=-1)
@click.pass_obj
@reports_errors
def create_command(
    app: AppContext, name: Optional[str], habit_type: Optional[str], objectives: tuple[str, ...]
) -> None:
    """Create a numerical or checklist habit."""

    name = _require(name, "Please enter the name of the habit you want to create.")
    app.store.create(name, parse_habit_type(habit_type, objectives))
    app.save()


@cli.command("add", context_settings={"ignore_unknown_options": True})
@click.argument("name", required=False)
@click.argument("amount", type=click.IntRange(I32_MIN, I32_MAX), default=1)
@click.pass_obj
@reports_errors
def add_command(app: AppContext, name: Optional[str], amount: int) -> None:
    """Add progress to today's entry of a habit."""

    name = _require(name, "Please enter the name of the habit you want to add to.")
    app.store.add(name, amount)
    app.save()


def _mark(app: AppContext, name: Optional[str], objective: Optional[str], finished: bool) -> None:
    verb = "finish" if finished else "unfinish"
    name = _require(name, f"Please enter the name of the habit you want to {verb}.")
    objective = _require(objective, "Please enter the objective of the habit you want to change.")
    app.store.mark_objective(name, objective, finished)
    app.save()


@cli.command("finish")
@click.argument("name", required=False)
@click.argument("objective", required=False)
@click.pass_obj
@reports_errors
def finish_command(app: AppContext, name: Optional[str], objective: Optional[str]) -> None:
    """Finish an objective of a checklist habit."""

    _mark(app, name, objective, True)


@cli.command("unfinish")
@click.argument("name", required=False)
@click.argument("objective", required=False)
@click.pass_obj
@reports_errors
def unfinish_command(app: AppContext, name: Optional[str], objective: Optional[str]) -> None:
    """Unfinish an objective of a checklist habit."""

    _mark(app, name, objective, False)


@cli.command("plot")
@click.argument("name", required=False)
@click.argument("days", type=click.IntRange(0, MAX_PLOT_DAYS), default=7)
@click.option("--cumulative", is_flag=True, default=False, help="Plot the running total.")
@click.pass_obj
@reports_errors
def plot_command(app: AppContext, name: Optional[str], days: int, cumulative: bool) -> None:
    """Plot a habit's recent progress to graphs/<name>.png."""

    name = _require(name, "Please enter the name of the habit you want to plot.")
    habit = app.store.get(name)
    path = render_habit_chart(habit, days, app.config.GRAPHS_DIR, cumulative=cumulative)
    click.echo(f"Graph saved: {path}")


@cli.command("stats")
@click.argument("name", required=False)
@click.pass_obj
@reports_errors
def stats_command(app: AppContext, name: Optional[str]) -> None:
    """Print current and longest streaks of a habit."""

    name = _require(name, "Please enter the name of the habit you want statistics for.")
    current, longest = compute_streaks(app.store.get(name))
    click.echo(f"{name}: current streak {current} day(s), longest streak {longest} day(s)")


@cli.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path), default="habits.csv")
@click.pass_obj
def export_command(app: AppContext, path: Path) -> None:
    """Export every habit's progress to CSV."""

    try:
        written = export_progress_csv(habits=app.store, output_path=path)
    except OSError as exc:
        raise click.ClickException(f"Could not write {path}: {exc}") from exc
    click.echo(f"Export written: {written}")


def main() -> None:
    """Console script entry point."""

    cli(prog_name="habit-tracker")


__all__ = ["cli", "main", "parse_habit_type"]
