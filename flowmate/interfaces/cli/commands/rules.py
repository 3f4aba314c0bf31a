"""Automation rule CLI commands.

Listing, adding, toggling and deleting rules.
"""

import typer
from rich.console import Console
from rich.table import Table

from flowmate.application.session import BoardSession
from flowmate.domain.automation.models import (
    CustomFieldCondition,
    DueDateCondition,
    MoveToColumnAction,
    Rule,
    SubtasksCompletedCondition,
)
from flowmate.domain.board import find_column, find_column_by_title
from flowmate.domain.shared.result import Err
from flowmate.interfaces.cli.common import (
    DataFileOption,
    describe_condition,
    describe_target,
    print_error,
    print_success,
    run_session,
)

app = typer.Typer(help="Automation rule commands")

CONDITION_TYPES = ("due-date", "subtasks-completed", "custom-field")
FIELD_OPERATORS = ("equals", "not-equals", "contains")


def _find_rule(session: BoardSession, rule_id: str) -> Rule:
    rule = next((r for r in session.store.rules if r.id == rule_id), None)
    if rule is None:
        print_error(f"Rule '{rule_id}' not found")
        raise typer.Exit(1)
    return rule


@app.command("list")
def list_rules(data_file: DataFileOption = None) -> None:
    """List automation rules in evaluation order."""

    async def action(session: BoardSession) -> None:
        rules = session.store.rules
        if not rules:
            typer.echo("No rules.")
            return
        table = Table()
        table.add_column("ID")
        table.add_column("Name")
        table.add_column("When")
        table.add_column("Move to")
        table.add_column("Enabled")
        for rule in rules:
            table.add_row(
                rule.id,
                rule.name,
                describe_condition(rule.condition),
                describe_target(rule, session.store.columns),
                "yes" if rule.enabled else "no",
            )
        Console().print(table)

    run_session(data_file, action)


@app.command("toggle")
def toggle(
    rule_id: str = typer.Argument(..., help="Rule ID"),
    data_file: DataFileOption = None,
) -> None:
    """Enable a disabled rule or disable an enabled one."""

    async def action(session: BoardSession) -> None:
        rule = _find_rule(session, rule_id)
        result = session.store.update_rule(rule_id, enabled=not rule.enabled)
        if isinstance(result, Err):
            print_error(result.error.message)
            raise typer.Exit(1)
        state = "disabled" if rule.enabled else "enabled"
        print_success(f"Rule '{rule.name}' {state}")

    run_session(data_file, action)


@app.command("add")
def add(
    name: str = typer.Option(..., "--name", "-n", help="Rule name"),
    target: str = typer.Option(..., "--target", "-t", help="Target column ID or title"),
    condition: str = typer.Option(
        "due-date", "--condition", "-c", help=f"One of: {', '.join(CONDITION_TYPES)}"
    ),
    field: str = typer.Option("", "--field", help="Custom field name (custom-field only)"),
    operator: str = typer.Option(
        "equals", "--operator", help=f"One of: {', '.join(FIELD_OPERATORS)} (custom-field only)"
    ),
    value: str = typer.Option("", "--value", help="Value to compare (custom-field only)"),
    disabled: bool = typer.Option(False, "--disabled", help="Create the rule switched off"),
    data_file: DataFileOption = None,
) -> None:
    """Add a rule that moves matching tasks into a column.

    Example:
        flowmate rules add -n "Urgent first" -c custom-field --field Priority --value Critical -t "In Progress"
    """
    if condition not in CONDITION_TYPES:
        print_error(f"Unknown condition '{condition}'. Choose from: {', '.join(CONDITION_TYPES)}")
        raise typer.Exit(1)
    if condition == "custom-field" and operator not in FIELD_OPERATORS:
        print_error(f"Unknown operator '{operator}'. Choose from: {', '.join(FIELD_OPERATORS)}")
        raise typer.Exit(1)

    async def action(session: BoardSession) -> None:
        columns = session.store.columns
        column = find_column(columns, target) or find_column_by_title(columns, target)
        if column is None:
            print_error(f"No column with ID or title '{target}'")
            raise typer.Exit(1)

        match condition:
            case "due-date":
                rule_condition = DueDateCondition()
            case "subtasks-completed":
                rule_condition = SubtasksCompletedCondition()
            case _:
                rule_condition = CustomFieldCondition(operator=operator, field=field, value=value)

        rule = Rule(
            name=name,
            condition=rule_condition,
            action=MoveToColumnAction(target_column_id=column.id),
            enabled=not disabled,
        )
        result = session.store.add_rule(rule)
        if isinstance(result, Err):
            print_error(result.error.message)
            raise typer.Exit(1)
        print_success(f"Added rule {rule.id}: {rule.name}")

    run_session(data_file, action)


@app.command("delete")
def delete(
    rule_id: str = typer.Argument(..., help="Rule ID"),
    data_file: DataFileOption = None,
) -> None:
    """Delete a rule."""

    async def action(session: BoardSession) -> None:
        result = session.store.delete_rule(rule_id)
        if isinstance(result, Err):
            print_error(result.error.message)
            raise typer.Exit(1)
        print_success(f"Deleted rule {rule_id}")

    run_session(data_file, action)
