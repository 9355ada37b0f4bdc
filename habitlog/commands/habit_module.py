# habitlog/commands/habit_module.py
'''
Habitlog CLI Habit Module - add, complete, delete and review habits.
Every command loads the habit file, runs one store operation and exits;
mutations are written back immediately by the store.
'''
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from habitlog.utils.cli_display import render_habits, render_profile, render_stats
from habitlog.utils.db.habit_store import HabitTracker
from habitlog.utils.db.models import HabitFilter
from habitlog.utils.error_handler import handle_cli_errors
from habitlog.utils.notifications import notify_reminder
from habitlog.utils.shared_utils import today_local

app = typer.Typer(help="Track weekly habits and their completions.")
console = Console()
logger = logging.getLogger(__name__)


def get_tracker() -> HabitTracker:
    return HabitTracker.from_config()


@app.command()
@handle_cli_errors("habit add")
def add(
    name: str = typer.Argument(..., help="The name of the habit."),
    target: int = typer.Option(..., "--target", "-t",
                               help="Completions per week (1-7)."),
):
    """
    Add a new habit with a weekly target.
    """
    tracker = get_tracker()
    habit = tracker.add_habit(name, target)
    console.print(
        f'[green]✓ Habit "{escape(habit.name)}" added ({habit.target_frequency}x/week).[/green]')


@app.command()
@handle_cli_errors("habit done")
def done(
    index: int = typer.Argument(..., help="Habit number as shown by `list`."),
):
    """
    Mark a habit complete for today.
    """
    tracker = get_tracker()
    result = tracker.complete_habit(index)
    if result.success:
        console.print(f"[green]✓ {escape(result.message)}[/green]")
    else:
        console.print(f"[yellow]✗ {escape(result.message)}[/yellow]")


@app.command()
@handle_cli_errors("habit delete")
def delete(
    index: int = typer.Argument(..., help="Habit number as shown by `list`."),
    force: bool = typer.Option(False, "--force", "-f",
                               help="Delete without confirmation."),
):
    """
    Delete a habit. Numbers of later habits shift down by one.
    """
    tracker = get_tracker()
    habit = tracker.get_habit(index)
    if not force and not typer.confirm(f'Delete habit "{habit.name}"?', default=False):
        console.print("[yellow]Delete aborted.[/yellow]")
        raise typer.Exit()
    name = tracker.delete_habit(index)
    console.print(f'[green]✓ Habit "{escape(name)}" deleted.[/green]')


@app.command("list")
@handle_cli_errors("habit list")
def list_habits(
    filter: HabitFilter = typer.Option(HabitFilter.ALL, "--filter", "-f",
                                       help="Which habits to show.",
                                       case_sensitive=False),
):
    """
    List habits with this week's progress.
    """
    tracker = get_tracker()
    today = today_local()
    render_habits(tracker.filter_habits(filter, today), filter, today, out=console)


@app.command()
@handle_cli_errors("habit stats")
def stats():
    """
    Show aggregate statistics for the current week.
    """
    render_stats(get_tracker().aggregate_stats(), out=console)


@app.command()
@handle_cli_errors("habit profile")
def profile():
    """
    Show the user profile.
    """
    render_profile(get_tracker().profile_summary(), out=console)


@app.command()
@handle_cli_errors("habit clear")
def clear(
    force: bool = typer.Option(False, "--force", "-f",
                               help="Clear without confirmation."),
):
    """
    Remove every habit.
    """
    if not force and not typer.confirm("Delete ALL habits?", default=False):
        console.print("[yellow]Clear aborted.[/yellow]")
        raise typer.Exit()
    get_tracker().clear()
    console.print("[green]✓ All habits removed.[/green]")


def remind_once(tracker: Optional[HabitTracker] = None) -> Optional[str]:
    """
    Print one reminder for a habit not yet done today.
    """
    if tracker is None:
        tracker = get_tracker()
    name = tracker.pending_reminder()
    if name is None:
        console.print("[green]Every habit is done for today.[/green]")
    else:
        notify_reminder(name)
    return name
