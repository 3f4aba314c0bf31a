"""CLI interface for FlowMate using Typer.

An operator CLI over a board stored in a JSON file.

Usage:
    flowmate show               # Show the board
    flowmate automate           # Run the automation rules once
    flowmate export [PATH]      # Write a backup file
    flowmate import PATH        # Replace the board with a backup
    flowmate rules list         # List automation rules

The CLI is structured as:
- app: Main Typer application
- commands/: Command groups (board, data, rules)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from pathlib import Path
from typing import Optional

import typer

from flowmate import __version__
from flowmate.interfaces.cli.commands import board, data, rules
from flowmate.interfaces.cli.common import DataFileOption, resolve_settings
from flowmate.logging_setup import setup_logging

app = typer.Typer(
    name="flowmate",
    help="Task board with rule-based automation",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"flowmate version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """FlowMate - a task board that files tasks for you.

    Tasks sit in columns; rules move them when they become overdue, when
    their checklist is done, or when a custom field matches.
    """
    settings = resolve_settings()
    setup_logging(
        log_dir=settings.log_dir,
        console_level="INFO" if verbose else settings.log_level,
    )


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(board.app, name="board")
app.add_typer(data.app, name="data")
app.add_typer(rules.app, name="rules")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("show")
def show(data_file: DataFileOption = None) -> None:
    """Show the board (shortcut for 'board show')."""
    board.show(data_file=data_file)


@app.command("automate")
def automate(data_file: DataFileOption = None) -> None:
    """Run automation once (shortcut for 'board automate')."""
    board.automate(data_file=data_file)


@app.command("seed")
def seed(
    data_file: DataFileOption = None,
    force: bool = typer.Option(False, "--force", help="Replace an existing board"),
) -> None:
    """Create default content (shortcut for 'board seed')."""
    board.seed(data_file=data_file, force=force)


@app.command("export")
def export(
    path: Optional[Path] = typer.Argument(None, help="Output file"),
    data_file: DataFileOption = None,
) -> None:
    """Write a backup (shortcut for 'data export')."""
    data.export(path=path, data_file=data_file)


@app.command("import")
def import_(
    path: Path = typer.Argument(..., help="Backup file to import"),
    data_file: DataFileOption = None,
) -> None:
    """Import a backup (shortcut for 'data import')."""
    data.import_(path=path, data_file=data_file)


@app.command("clear-tasks")
def clear_tasks(
    data_file: DataFileOption = None,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every task (shortcut for 'data clear-tasks')."""
    data.clear_tasks(data_file=data_file, yes=yes)


__all__ = ["app"]
