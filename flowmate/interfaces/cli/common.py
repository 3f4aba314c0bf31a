"""Shared utilities for FlowMate CLI commands.

- The ``--data-file`` option and settings resolution
- Running a command body inside a started board session
- Formatted output helpers (error, success, info)
- Rule description for listings
"""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated, Optional, TypeVar

import typer

from flowmate.application.notifications import Notification, NotificationLevel
from flowmate.application.session import BoardSession
from flowmate.config import Settings, load_settings
from flowmate.domain.automation.models import (
    Condition,
    CustomFieldCondition,
    DueDateCondition,
    Rule,
    SubtasksCompletedCondition,
)
from flowmate.domain.board import Columns, find_column
from flowmate.infrastructure.storage.file_gateway import JsonFileGateway

T = TypeVar("T")

# Reusable data file option for CLI commands
# Usage: def my_command(data_file: DataFileOption = None) -> None:
DataFileOption = Annotated[Optional[Path], typer.Option(
    "--data-file", "-f",
    help="Board JSON file (or set FLOWMATE_DATA_FILE env var)",
    envvar="FLOWMATE_DATA_FILE",
)]


def resolve_settings(data_file: Path | None = None) -> Settings:
    """Load settings, with an explicit data file taking precedence."""
    settings = load_settings()
    if data_file is not None:
        settings = settings.model_copy(update={"data_file": data_file})
    return settings


class CliNotificationSink:
    """Prints session notifications to the terminal."""

    def notify(self, notification: Notification) -> None:
        if notification.level is NotificationLevel.ERROR:
            print_error(str(notification))
        elif notification.level is NotificationLevel.SUCCESS:
            print_success(str(notification))
        else:
            print_info(str(notification))


def run_session(
    data_file: Path | None,
    action: Callable[[BoardSession], Awaitable[T]],
    *,
    automate: bool = False,
) -> T:
    """Start a session on the data file, run ``action``, then close it.

    Pending autosaves are written on the way out. Exits with status 1
    when the data file cannot be loaded.
    """
    settings = resolve_settings(data_file)

    async def _run() -> T:
        session = BoardSession(JsonFileGateway(settings.data_file), settings, CliNotificationSink())
        await session.start(automate=automate)
        if session.load_failed:
            raise typer.Exit(1)
        try:
            return await action(session)
        finally:
            await session.close()

    return asyncio.run(_run())


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def describe_condition(condition: Condition) -> str:
    """One-line description of a rule condition."""
    match condition:
        case DueDateCondition():
            return "Task is overdue"
        case SubtasksCompletedCondition():
            return "All subtasks completed"
        case CustomFieldCondition(operator=operator, field=name, value=value):
            return f'{name} {operator.replace("-", " ")} "{value}"'
    return condition.type


def describe_target(rule: Rule, columns: Columns) -> str:
    target = find_column(columns, rule.action.target_column_id)
    if target is None:
        return f"{rule.action.target_column_id} (missing)"
    return target.title


__all__ = [
    "DataFileOption",
    "resolve_settings",
    "run_session",
    "CliNotificationSink",
    "print_error",
    "print_success",
    "print_info",
    "describe_condition",
    "describe_target",
]
