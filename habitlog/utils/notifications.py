# habitlog/utils/notifications.py
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def notify_reminder(habit_name: str):
    console.print(Panel(
        f'⏰ REMINDER: Don\'t forget "{escape(habit_name)}"!',
        style="bold magenta", expand=False))
