# habitlog/utils/cli_display.py
"""
Rich renderers for profile, habit lists and statistics.
"""
from datetime import date
from typing import List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from habitlog.utils.db.models import (
    Habit, HabitFilter, HabitStats, HabitStatus, ProfileSummary,
)
from habitlog.utils.shared_utils import format_date_for_user

console = Console()

FILTER_TITLES = {
    HabitFilter.ALL: "ALL HABITS",
    HabitFilter.ACTIVE: "ACTIVE HABITS",
    HabitFilter.COMPLETED: "COMPLETED HABITS",
}


def progress_bar(percentage: int, width: int = 10) -> str:
    filled = round((percentage / 100) * width)
    return "█" * filled + "░" * (width - filled)


def status_label(status: HabitStatus) -> str:
    if status == HabitStatus.COMPLETED:
        return "[green]Completed[/green]"
    return "[yellow]Active[/yellow]"


def render_profile(summary: ProfileSummary, out: Optional[Console] = None):
    out = out or console
    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Name", escape(summary.name))
    table.add_row("Joined", format_date_for_user(summary.join_date))
    table.add_row("Days joined", f"{summary.days_joined} day(s)")
    table.add_row("Total habits", str(summary.total_habits))
    table.add_row("Completed this week", str(summary.completed_this_week))
    out.print(Panel(table, title="USER PROFILE", expand=False))


def render_habits(rows: List[Tuple[int, Habit]], kind: HabitFilter, today: date,
                  out: Optional[Console] = None):
    out = out or console
    if not rows:
        out.print(f"[bold]{FILTER_TITLES[kind]}[/bold]")
        out.print("[dim]No habits to show.[/dim]")
        return

    table = Table(title=FILTER_TITLES[kind], box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right")
    table.add_column("Status")
    table.add_column("Habit", style="bold")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")
    table.add_column("")

    for index, habit in rows:
        current = habit.weekly_completion_count(today)
        pct = habit.progress_percentage(today)
        table.add_row(
            str(index),
            status_label(habit.status(today)),
            escape(habit.name),
            f"{habit.target_frequency}x/week",
            f"{current}/{habit.target_frequency} ({pct}%)",
            progress_bar(pct),
        )
    out.print(table)


def render_stats(stats: HabitStats, out: Optional[Console] = None):
    out = out or console
    if stats.total == 0:
        out.print("[bold]HABIT STATISTICS[/bold]")
        out.print("[dim]No data to show yet.[/dim]")
        return

    table = Table(show_header=False, box=box.SIMPLE)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total habits", str(stats.total))
    table.add_row("Active habits", str(stats.active))
    table.add_row("Completed habits", str(stats.completed))
    table.add_row("Completions this week", str(stats.total_weekly_completions))
    out.print(Panel(table, title="HABIT STATISTICS", expand=False))

    out.print("Habits:")
    for i, name in enumerate(stats.names, start=1):
        out.print(f"  {i}. {escape(name)}")
