"""Task editing helpers.

Small pure transformations a task detail view needs: ticking subtasks,
adding/removing checklist items and custom fields, changing the due date.
Each returns a new Task (or a Result when the input can be refused); feed
the result to ``BoardStore.update_task``.
"""

from datetime import datetime

from flowmate.domain.board.errors import ValidationFailed
from flowmate.domain.board.models import CustomField, Subtask, Task
from flowmate.domain.board.validation import is_blank
from flowmate.domain.shared.ids import isoformat
from flowmate.domain.shared.result import Err, Ok, Result


def toggle_subtask(task: Task, subtask_id: str) -> Task:
    subtasks = tuple(
        s.model_copy(update={"completed": not s.completed}) if s.id == subtask_id else s
        for s in task.subtasks
    )
    return task.model_copy(update={"subtasks": subtasks})


def add_subtask(task: Task, title: str) -> Result[Task, ValidationFailed]:
    """Append a checklist item. Blank titles are refused."""
    if is_blank(title):
        return Err(ValidationFailed(("Subtask title must not be empty",)))
    subtask = Subtask(title=title.strip())
    return Ok(task.model_copy(update={"subtasks": task.subtasks + (subtask,)}))


def remove_subtask(task: Task, subtask_id: str) -> Task:
    return task.model_copy(update={"subtasks": tuple(s for s in task.subtasks if s.id != subtask_id)})


def add_custom_field(task: Task, name: str, value: str = "") -> Result[Task, ValidationFailed]:
    """Append a custom field. Blank names are refused; values may be empty."""
    if is_blank(name):
        return Err(ValidationFailed(("Custom field name must not be empty",)))
    field = CustomField(name=name.strip(), value=value)
    return Ok(task.model_copy(update={"custom_fields": task.custom_fields + (field,)}))


def set_custom_field_value(task: Task, field_id: str, value: str) -> Task:
    fields = tuple(
        f.model_copy(update={"value": value}) if f.id == field_id else f
        for f in task.custom_fields
    )
    return task.model_copy(update={"custom_fields": fields})


def remove_custom_field(task: Task, field_id: str) -> Task:
    return task.model_copy(
        update={"custom_fields": tuple(f for f in task.custom_fields if f.id != field_id)}
    )


def with_due_date(task: Task, due: datetime | None) -> Task:
    """Set or clear the due date."""
    return task.model_copy(update={"due_date": isoformat(due) if due is not None else None})
