# habitlog/commands/menu.py
'''
Interactive numbered menu with background reminders.
'''
import logging
from typing import Callable, Dict, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from habitlog.utils.cli_display import render_habits, render_profile, render_stats
from habitlog.utils.db.habit_store import HabitTracker
from habitlog.utils.db.models import HabitFilter
from habitlog.utils.error_handler import (
    HabitNotFoundError, ValidationError, safe_convert_to_int,
)
from habitlog.utils.notifications import notify_reminder
from habitlog.utils.reminders import ReminderScheduler
from habitlog.utils.shared_utils import format_date_for_user, today_local

console = Console()
logger = logging.getLogger(__name__)

MENU_ITEMS = [
    ("1", "View profile"),
    ("2", "View all habits"),
    ("3", "View active habits"),
    ("4", "View completed habits"),
    ("5", "Add new habit"),
    ("6", "Mark habit complete"),
    ("7", "Delete habit"),
    ("8", "View statistics"),
    ("0", "Exit"),
]


def ask(question: str) -> Optional[str]:
    """Read one line; None on end of input."""
    try:
        return input(question)
    except EOFError:
        return None


def show_banner(tracker: HabitTracker):
    console.print(Panel(
        "[bold cyan]HABITLOG[/bold cyan]\n"
        "Track your daily habits against weekly targets\n"
        f"User: {escape(tracker.profile.name)}\n"
        f"Date: {format_date_for_user(today_local())}",
        expand=False))


def show_menu():
    console.print("\n[bold]HABITLOG - MAIN MENU[/bold]")
    for key, label in MENU_ITEMS:
        console.print(f"{key}. {label}")


def add_habit_prompt(tracker: HabitTracker):
    console.print("\n[bold]--- ADD NEW HABIT ---[/bold]")
    name = ask("Habit name: ")
    frequency = ask("Target per week (1-7): ")
    if name is None or frequency is None:
        return
    try:
        habit = tracker.add_habit(name, frequency)
    except ValidationError as e:
        console.print(f"[red]✗ {e}[/red]")
        return
    console.print(f'[green]✓ Habit "{escape(habit.name)}" added![/green]')


def _ask_index(tracker: HabitTracker, question: str) -> Optional[int]:
    render_habits(tracker.filter_habits(HabitFilter.ALL), HabitFilter.ALL,
                  today_local(), out=console)
    if len(tracker) == 0:
        return None
    raw = ask(question)
    if raw is None:
        return None
    try:
        return safe_convert_to_int(raw, "habit number")
    except ValidationError as e:
        console.print(f"[red]✗ {e}[/red]")
        return None


def complete_habit_prompt(tracker: HabitTracker):
    index = _ask_index(tracker, "Number of the habit you completed: ")
    if index is None:
        return
    try:
        result = tracker.complete_habit(index)
    except HabitNotFoundError as e:
        console.print(f"[red]✗ {e}[/red]")
        return
    mark = "[green]✓" if result.success else "[yellow]✗"
    console.print(f"{mark} {escape(result.message)}[/]")


def delete_habit_prompt(tracker: HabitTracker):
    index = _ask_index(tracker, "Number of the habit to delete: ")
    if index is None:
        return
    try:
        name = tracker.delete_habit(index)
    except HabitNotFoundError as e:
        console.print(f"[red]✗ {e}[/red]")
        return
    console.print(f'[green]✓ Habit "{escape(name)}" deleted![/green]')


def build_actions(tracker: HabitTracker) -> Dict[str, Callable[[], None]]:
    def show(kind: HabitFilter) -> Callable[[], None]:
        return lambda: render_habits(tracker.filter_habits(kind), kind,
                                     today_local(), out=console)

    return {
        "1": lambda: render_profile(tracker.profile_summary(), out=console),
        "2": show(HabitFilter.ALL),
        "3": show(HabitFilter.ACTIVE),
        "4": show(HabitFilter.COMPLETED),
        "5": lambda: add_habit_prompt(tracker),
        "6": lambda: complete_habit_prompt(tracker),
        "7": lambda: delete_habit_prompt(tracker),
        "8": lambda: render_stats(tracker.aggregate_stats(), out=console),
    }


def offer_demo_data(tracker: HabitTracker):
    if len(tracker) > 0:
        return
    console.print("[dim]No habits found.[/dim]")
    if typer.confirm("Add demo habits?", default=False):
        tracker.seed_demo_data()
        console.print("[green]✓ Demo habits added![/green]")


def run_menu(tracker: HabitTracker, scheduler: Optional[ReminderScheduler] = None) -> None:
    """
    Main loop; returns when the user picks 0 or input ends.
    The reminder scheduler, if any, is stopped on the way out.
    """
    show_banner(tracker)
    offer_demo_data(tracker)
    if scheduler is not None and scheduler.start():
        console.print(
            f"[dim]Reminders enabled (every {scheduler.interval:g} seconds)[/dim]")

    actions = build_actions(tracker)
    try:
        while True:
            show_menu()
            choice = ask("Choose an option (0-8): ")
            if choice is None:
                break
            choice = choice.strip()
            if choice == "0":
                console.print(
                    "[bold]Thanks for using Habitlog! Your data is saved.[/bold]")
                break
            action = actions.get(choice)
            if action is None:
                console.print("[yellow]✗ Invalid choice, pick 0-8.[/yellow]")
                continue
            action()
    finally:
        if scheduler is not None and scheduler.stop():
            console.print("[dim]Reminders disabled[/dim]")


def make_scheduler(tracker: HabitTracker, interval: float) -> ReminderScheduler:
    return ReminderScheduler(
        interval=interval,
        check=tracker.pending_reminder,
        notify=notify_reminder,
    )
