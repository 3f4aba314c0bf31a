"""Board error values.

These are not exceptions. Refused operations return ``Err(<BoardError>)``
so the caller can report the condition and carry on with the unchanged
state. Nothing here is fatal.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BoardError:
    """Base for all recoverable board conditions."""

    @property
    def message(self) -> str:
        return "Board operation refused"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationFailed(BoardError):
    """Required fields missing or cross-references not resolving."""

    problems: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return "; ".join(self.problems) or "Validation failed"


@dataclass(frozen=True)
class ColumnNotFound(BoardError):
    column_id: str = ""

    @property
    def message(self) -> str:
        return f"Column '{self.column_id}' not found"


@dataclass(frozen=True)
class TaskNotFound(BoardError):
    task_id: str = ""

    @property
    def message(self) -> str:
        return f"Task '{self.task_id}' not found"


@dataclass(frozen=True)
class RuleNotFound(BoardError):
    rule_id: str = ""

    @property
    def message(self) -> str:
        return f"Rule '{self.rule_id}' not found"


@dataclass(frozen=True)
class ColumnNotEmpty(BoardError):
    """A column still holding tasks cannot be deleted."""

    column_id: str = ""
    task_count: int = 0

    @property
    def message(self) -> str:
        return (
            f"Cannot delete column '{self.column_id}': it still holds "
            f"{self.task_count} task(s). Move all tasks to other columns first."
        )


@dataclass(frozen=True)
class DuplicateColumnTitle(BoardError):
    title: str = ""

    @property
    def message(self) -> str:
        return f"A column titled '{self.title}' already exists"


@dataclass(frozen=True)
class ImportFailed(BoardError):
    """A snapshot could not be parsed or written; nothing was imported."""

    reason: str = ""

    @property
    def message(self) -> str:
        return f"Import failed: {self.reason}" if self.reason else "Import failed"
