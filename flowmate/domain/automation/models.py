"""Automation rule models.

A rule pairs a condition with an action. Conditions are a tagged union
discriminated on ``type``, so pydantic picks the right variant when a rule
is loaded from storage and the engine can ``match`` on the class.
Adding a condition means adding a variant here and a case in
``engine.evaluate_condition``.
"""

from typing import Annotated, Literal, Union

from pydantic import Field

from flowmate.domain.board.models import BoardModel
from flowmate.domain.shared.ids import generate_id


class DueDateCondition(BoardModel):
    """Matches tasks whose due date has passed and are not completed."""

    type: Literal["due-date"] = "due-date"
    operator: Literal["is-overdue"] = "is-overdue"


class SubtasksCompletedCondition(BoardModel):
    """Matches tasks with at least one subtask, all of them completed."""

    type: Literal["subtasks-completed"] = "subtasks-completed"
    operator: Literal["all-completed"] = "all-completed"


class CustomFieldCondition(BoardModel):
    """Compares the first custom field called ``field`` with ``value``."""

    type: Literal["custom-field"] = "custom-field"
    operator: Literal["equals", "not-equals", "contains"] = "equals"
    field: str = ""
    value: str = ""


Condition = Annotated[
    Union[DueDateCondition, SubtasksCompletedCondition, CustomFieldCondition],  # noqa: UP007
    Field(discriminator="type"),
]


class MoveToColumnAction(BoardModel):
    """Move the matching task to the end of the target column."""

    type: Literal["move-to-column"] = "move-to-column"
    target_column_id: str


# Only one action kind exists today; widen to a discriminated union
# like Condition when a second one is added.
Action = MoveToColumnAction


class Rule(BoardModel):
    """A named, switchable condition/action pair."""

    id: str = Field(default_factory=lambda: generate_id("rule"))
    name: str
    condition: Condition
    action: Action
    enabled: bool = True
