"""Board CLI commands.

Viewing the board, running automation and seeding default content.
"""

import typer
from rich.console import Console
from rich.table import Table

from flowmate.application.session import BoardSession
from flowmate.domain.automation.engine import is_overdue
from flowmate.domain.board import Column
from flowmate.domain.shared.ids import utc_now
from flowmate.domain.shared.result import Err
from flowmate.interfaces.cli.common import (
    DataFileOption,
    print_info,
    print_success,
    run_session,
)

app = typer.Typer(help="Board commands")


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def column_table(column: Column, completed_status: str) -> Table:
    """Render one column as a rich table."""
    table = Table(title=f"{column.title} ({len(column.tasks)})", title_justify="left", expand=False)
    table.add_column("Task")
    table.add_column("Due")
    table.add_column("Subtasks", justify="right")
    table.add_column("Fields")

    now = utc_now()
    for task in column.tasks:
        due = task.due_date[:10] if task.due_date else ""
        if is_overdue(task, now, completed_status):
            due = f"[red]{due} (overdue)[/red]"
        done = sum(1 for s in task.subtasks if s.completed)
        subtasks = f"{done}/{len(task.subtasks)}" if task.subtasks else ""
        fields = ", ".join(f"{f.name}: {f.value}" for f in task.custom_fields)
        table.add_row(task.title, due, subtasks, fields)
    return table


# =============================================================================
# Commands
# =============================================================================


@app.command("show")
def show(data_file: DataFileOption = None) -> None:
    """Show every column and its tasks.

    Example:
        flowmate show --data-file board.json
    """

    async def action(session: BoardSession) -> None:
        console = Console()
        for column in session.store.columns:
            console.print(column_table(column, session.settings.completed_status))
        enabled = sum(1 for r in session.store.rules if r.enabled)
        console.print(f"{len(session.store.rules)} rule(s), {enabled} enabled")

    run_session(data_file, action)


@app.command("automate")
def automate(data_file: DataFileOption = None) -> None:
    """Run one automation pass over the stored board and save the result."""

    async def action(session: BoardSession) -> None:
        moved = session.automation.history
        if not moved:
            print_info("No tasks matched any enabled rule.")
            return
        print_success(f"Moved {len(moved)} task(s).")

    run_session(data_file, action, automate=True)


@app.command("seed")
def seed(
    data_file: DataFileOption = None,
    force: bool = typer.Option(False, "--force", help="Replace an existing board"),
) -> None:
    """Create the default columns, sample tasks and rules.

    An empty data file is seeded automatically; use --force to replace
    a board that already has columns.
    """

    async def action(session: BoardSession) -> None:
        if not force:
            typer.echo(f"Board has {len(session.store.columns)} column(s). Use --force to replace it.")
            return
        result = await session.reset_to_defaults()
        if isinstance(result, Err):
            raise typer.Exit(1)

    run_session(data_file, action)
