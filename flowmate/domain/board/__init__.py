"""Board domain - tasks, columns and the operations that rearrange them.

All exports are pure (no I/O, no side effects).

Key Types:
    Task, Subtask, CustomField - card content
    Column - ordered bucket of tasks; its title is the task status key
    Columns - the whole arrangement (tuple of Column)

Operations:
    add_task, update_task, delete_task, move_task, copy_task
    add_column, update_column, delete_column, clear_tasks
    check_invariants

Errors (returned inside Err, never raised):
    ValidationFailed, ColumnNotFound, TaskNotFound, RuleNotFound,
    ColumnNotEmpty, DuplicateColumnTitle, ImportFailed
"""

from .errors import (
    BoardError,
    ColumnNotEmpty,
    ColumnNotFound,
    DuplicateColumnTitle,
    ImportFailed,
    RuleNotFound,
    TaskNotFound,
    ValidationFailed,
)
from .events import BoardChanged, ChangeKind
from .models import (
    COMPLETED_STATUS,
    DEFAULT_COLUMN_COLOR,
    BoardModel,
    Column,
    Columns,
    CustomField,
    Subtask,
    Task,
)
from .operations import (
    add_column,
    add_task,
    all_tasks,
    check_invariants,
    clear_tasks,
    column_of_task,
    copy_task,
    delete_column,
    delete_task,
    find_column,
    find_column_by_title,
    find_task,
    locate_task,
    move_task,
    update_column,
    update_task,
)
from .validation import is_valid_column, is_valid_task, validate_column, validate_task

__all__ = [
    # Models
    "BoardModel",
    "Task",
    "Subtask",
    "CustomField",
    "Column",
    "Columns",
    "COMPLETED_STATUS",
    "DEFAULT_COLUMN_COLOR",
    # Operations
    "all_tasks",
    "find_column",
    "find_column_by_title",
    "find_task",
    "locate_task",
    "column_of_task",
    "add_task",
    "update_task",
    "delete_task",
    "move_task",
    "copy_task",
    "clear_tasks",
    "add_column",
    "update_column",
    "delete_column",
    "check_invariants",
    # Validation
    "validate_task",
    "validate_column",
    "is_valid_task",
    "is_valid_column",
    # Errors
    "BoardError",
    "ValidationFailed",
    "ColumnNotFound",
    "TaskNotFound",
    "RuleNotFound",
    "ColumnNotEmpty",
    "DuplicateColumnTitle",
    "ImportFailed",
    # Events
    "BoardChanged",
    "ChangeKind",
]
