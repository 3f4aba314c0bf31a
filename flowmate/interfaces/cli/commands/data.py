"""Data management CLI commands.

Backup export, import and clearing tasks.
"""

from datetime import date
from pathlib import Path
from typing import Optional

import typer

from flowmate.application.session import BoardSession
from flowmate.domain.shared.result import Err
from flowmate.domain.snapshot import backup_filename
from flowmate.infrastructure.storage.json_storage import JsonStorage
from flowmate.interfaces.cli.common import (
    DataFileOption,
    print_error,
    print_success,
    run_session,
)

app = typer.Typer(help="Backup and data management commands")


@app.command("export")
def export(
    path: Optional[Path] = typer.Argument(
        None, help="Output file (default: flowmate-backup-YYYY-MM-DD.json in the current directory)"
    ),
    data_file: DataFileOption = None,
) -> None:
    """Write a backup of tasks, columns and rules to a JSON file."""
    output = path or Path.cwd() / backup_filename(date.today())

    async def action(session: BoardSession) -> None:
        result = await session.export_data()
        if isinstance(result, Err):
            raise typer.Exit(1)
        saved = JsonStorage().save_json(output, result.value.to_wire())
        if isinstance(saved, Err):
            print_error(saved.error)
            raise typer.Exit(1)
        print_success(f"Wrote {output}")

    run_session(data_file, action)


@app.command("import")
def import_(
    path: Path = typer.Argument(..., help="Backup file to import"),
    data_file: DataFileOption = None,
) -> None:
    """Replace the whole board with a backup file."""
    loaded = JsonStorage().load_json(path)
    if isinstance(loaded, Err):
        print_error(f"Import failed: {loaded.error}")
        raise typer.Exit(1)

    async def action(session: BoardSession) -> None:
        result = await session.import_data(loaded.value)
        if isinstance(result, Err):
            print_error(result.error.message)
            raise typer.Exit(1)
        snapshot = result.value
        typer.echo(
            f"  {len(snapshot.columns)} column(s), {len(snapshot.tasks)} task(s), "
            f"{len(snapshot.rules)} rule(s)"
        )

    run_session(data_file, action)


@app.command("clear-tasks")
def clear_tasks(
    data_file: DataFileOption = None,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
) -> None:
    """Delete every task. Columns and rules are kept."""
    if not yes:
        typer.confirm("Delete all tasks? This cannot be undone.", abort=True)

    async def action(session: BoardSession) -> None:
        result = await session.clear_tasks()
        if isinstance(result, Err):
            raise typer.Exit(1)

    run_session(data_file, action)
