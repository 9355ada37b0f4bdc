#!/usr/bin/env python3
# Habitlog - A terminal-based habit tracker
# Copyright (C) 2024 Zach McKinnon
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
'''
Habitlog CLI
Register habits with a weekly target, mark completions and review progress,
either through one-shot commands or the interactive menu with reminders.
'''
import logging
import sys
from typing import Annotated

import click
import typer
from rich.console import Console

import habitlog.config.config_manager as cf
from habitlog.commands import habit_module, menu
from habitlog.utils import log_utils


app = typer.Typer(
    help="🧠 Habitlog CLI: Track your habits against weekly targets.")
app.add_typer(habit_module.app, name="habit",
              help="Add, complete, delete and list habits.")

console = Console()
logger = logging.getLogger(__name__)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """
    Main callback before any command.
    - Sets up logging from the configured level.
    - Opens the interactive menu when no subcommand is given.
    """
    log_utils.setup_logging(cf.get_log_level())
    if ctx.invoked_subcommand is None:
        run_interactive(no_reminders=False)


@app.command("menu")
def menu_command(
    no_reminders: Annotated[bool, typer.Option(
        "--no-reminders", help="Disable periodic reminders.")] = False,
):
    """Open the interactive habit menu."""
    run_interactive(no_reminders)


@app.command("remind")
def remind_command():
    """Show one reminder for a habit not yet done today."""
    habit_module.remind_once()


def run_interactive(no_reminders: bool):
    tracker = habit_module.get_tracker()
    scheduler = None
    if not no_reminders and cf.is_reminder_enabled():
        scheduler = menu.make_scheduler(tracker, cf.get_reminder_interval())
    menu.run_menu(tracker, scheduler)


def main():
    try:
        code = app(standalone_mode=False)
    except (typer.Abort, KeyboardInterrupt):
        console.print("\n[yellow]🚪 Exiting...[/yellow]")
        sys.exit(0)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except Exception as e:
        logger.error(f"Unhandled error: {e}", exc_info=True)
        console.print(f"[red]⚠️ Unhandled error: {e}[/red]")
        sys.exit(1)
    sys.exit(code if isinstance(code, int) else 0)


if __name__ == "__main__":
    main()
