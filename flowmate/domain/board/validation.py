"""Validation predicates for board entities.

Each ``validate_*`` function returns ``Ok(entity)`` or
``Err(ValidationFailed)`` listing every problem found; the ``is_valid_*``
wrappers collapse that to a bool. Nothing here raises, so the board store
decides what to do with an invalid entity.

Rule validation lives next to the rule model in
``flowmate.domain.automation.validation``.
"""

from collections.abc import Iterable

from flowmate.domain.board.errors import ValidationFailed
from flowmate.domain.board.models import Column, Task
from flowmate.domain.shared.result import Err, Ok, Result, is_ok


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


def validate_task(task: Task, columns: Iterable[Column] | None = None) -> Result[Task, ValidationFailed]:
    """Check a task's required fields and, if columns are given, its status.

    Args:
        task: The task to check.
        columns: The board to resolve ``task.status`` against. When omitted,
            only the task's own fields are checked.

    Returns:
        Ok(task) if valid, Err(ValidationFailed) listing the problems.
    """
    problems: list[str] = []
    if is_blank(task.id):
        problems.append("Task id is required")
    if is_blank(task.title):
        problems.append("Task title must not be empty")
    if is_blank(task.created_at):
        problems.append("Task createdAt is required")

    subtask_ids = [s.id for s in task.subtasks]
    if len(subtask_ids) != len(set(subtask_ids)):
        problems.append(f"Task '{task.id}' has duplicate subtask ids")
    field_ids = [f.id for f in task.custom_fields]
    if len(field_ids) != len(set(field_ids)):
        problems.append(f"Task '{task.id}' has duplicate custom field ids")

    if columns is not None:
        titles = {c.title for c in columns}
        if task.status not in titles:
            problems.append(f"Task status '{task.status}' does not match any column")

    if problems:
        return Err(ValidationFailed(tuple(problems)))
    return Ok(task)


def validate_column(column: Column, columns: Iterable[Column] | None = None) -> Result[Column, ValidationFailed]:
    """Check a column's required fields and that its tasks carry its title.

    When ``columns`` is given, the title must not be used by another column.
    """
    problems: list[str] = []
    if is_blank(column.id):
        problems.append("Column id is required")
    if is_blank(column.title):
        problems.append("Column title must not be empty")

    for task in column.tasks:
        if task.status != column.title:
            problems.append(
                f"Task '{task.id}' has status '{task.status}' but sits in column '{column.title}'"
            )

    if columns is not None:
        for other in columns:
            if other.id != column.id and other.title == column.title:
                problems.append(f"Column title '{column.title}' is already used")
                break

    if problems:
        return Err(ValidationFailed(tuple(problems)))
    return Ok(column)


def is_valid_task(task: Task, columns: Iterable[Column] | None = None) -> bool:
    return is_ok(validate_task(task, columns))


def is_valid_column(column: Column, columns: Iterable[Column] | None = None) -> bool:
    return is_ok(validate_column(column, columns))
