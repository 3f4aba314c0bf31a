"""Board domain models.

Pure domain models for the task board. Models are frozen pydantic models
so every board mutation produces new objects (copy-on-write); a reader
holding an older snapshot never sees a half-applied change.

Field names are snake_case in Python and camelCase on the wire
(``dueDate``, ``customFields``, ``createdAt``), matching the export file
format.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from flowmate.domain.shared.ids import generate_id, isoformat, utc_now

COMPLETED_STATUS = "Completed"
DEFAULT_COLUMN_COLOR = "bg-gray-50 dark:bg-gray-900/30"


class BoardModel(BaseModel):
    """Base for all board models: frozen, camelCase aliases on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class Subtask(BoardModel):
    """A checklist item on a task."""

    id: str = Field(default_factory=lambda: generate_id("subtask"))
    title: str
    completed: bool = False


class CustomField(BoardModel):
    """A free-form name/value pair attached to a task.

    Names are not unique; rule conditions look at the first field
    with a matching name.
    """

    id: str = Field(default_factory=lambda: generate_id("field"))
    name: str
    value: str = ""


class Task(BoardModel):
    """A card on the board.

    ``status`` always equals the title of the column currently holding
    the task. ``created_at`` is set once and never changed.
    """

    id: str = Field(default_factory=lambda: generate_id("task"))
    title: str
    description: str | None = None
    status: str = ""
    due_date: str | None = None
    subtasks: tuple[Subtask, ...] = ()
    custom_fields: tuple[CustomField, ...] = ()
    created_at: str = Field(default_factory=lambda: isoformat(utc_now()))

    def first_field(self, name: str) -> CustomField | None:
        """Return the first custom field called ``name``, if any."""
        for field in self.custom_fields:
            if field.name == name:
                return field
        return None


class Column(BoardModel):
    """An ordered bucket of tasks representing one workflow stage.

    The title is unique across the board and doubles as the key that
    ``Task.status`` refers to. Task order is display/ranking order.
    """

    id: str = Field(default_factory=lambda: generate_id("column"))
    title: str
    tasks: tuple[Task, ...] = ()
    color: str = DEFAULT_COLUMN_COLOR

    def index_of(self, task_id: str) -> int | None:
        """Position of a task in this column, or None."""
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return None


# The whole board arrangement: columns in display order.
Columns = tuple[Column, ...]
