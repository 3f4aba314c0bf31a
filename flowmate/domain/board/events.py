"""Board domain events.

The board store emits one ``BoardChanged`` per settled state change.
Subscribers use ``kind`` to decide what to do: autosave picks a
persistence lane, automation re-evaluates on all of them.
"""

from dataclasses import dataclass
from enum import Enum

from flowmate.domain.shared.events import DomainEvent


class ChangeKind(str, Enum):
    """What part of the board a change touched."""

    LOADED = "loaded"              # state replaced from storage; nothing to persist
    COLUMNS = "columns"            # columns or task placement changed
    TASK_CREATED = "task-created"  # a new task was added; persist without debounce
    RULES = "rules"                # automation rules changed


@dataclass(frozen=True)
class BoardChanged(DomainEvent):
    """Raised after a mutation has been applied to the board.

    Attributes:
        kind: Which part of the board changed.
        operation: Name of the store operation that caused it (for logs).
    """

    kind: ChangeKind = ChangeKind.COLUMNS
    operation: str = ""
