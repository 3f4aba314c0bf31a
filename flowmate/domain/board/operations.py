"""Pure board operations.

All functions in this module are pure - no I/O, no side effects. They
take a ``Columns`` snapshot and return a new one wrapped in a Result;
the input snapshot is never modified. Refusals come back as
``Err(BoardError)`` and leave the caller's state exactly as it was.
"""

from collections.abc import Iterable

from flowmate.domain.board.errors import (
    BoardError,
    ColumnNotEmpty,
    ColumnNotFound,
    DuplicateColumnTitle,
    TaskNotFound,
    ValidationFailed,
)
from flowmate.domain.board.models import DEFAULT_COLUMN_COLOR, Column, Columns, Task
from flowmate.domain.board.validation import is_blank, validate_task
from flowmate.domain.shared.ids import Clock, generate_id, isoformat, utc_now
from flowmate.domain.shared.result import Err, Ok, Result

# =============================================================================
# Lookups
# =============================================================================


def all_tasks(columns: Iterable[Column]) -> list[Task]:
    """Every task on the board, column by column, in display order."""
    return [task for column in columns for task in column.tasks]


def find_column(columns: Columns, column_id: str) -> Column | None:
    for column in columns:
        if column.id == column_id:
            return column
    return None


def find_column_by_title(columns: Columns, title: str) -> Column | None:
    for column in columns:
        if column.title == title:
            return column
    return None


def locate_task(columns: Columns, task_id: str) -> tuple[int, int] | None:
    """Find a task by id across all columns.

    Returns:
        (column_index, task_index), or None if no column holds the task.
    """
    for col_index, column in enumerate(columns):
        task_index = column.index_of(task_id)
        if task_index is not None:
            return col_index, task_index
    return None


def find_task(columns: Columns, task_id: str) -> Task | None:
    location = locate_task(columns, task_id)
    if location is None:
        return None
    col_index, task_index = location
    return columns[col_index].tasks[task_index]


def column_of_task(columns: Columns, task_id: str) -> Column | None:
    location = locate_task(columns, task_id)
    return None if location is None else columns[location[0]]


def _column_index(columns: Columns, column_id: str) -> int | None:
    for i, column in enumerate(columns):
        if column.id == column_id:
            return i
    return None


def _replace(columns: Columns, index: int, column: Column) -> Columns:
    return columns[:index] + (column,) + columns[index + 1:]


def _clamp(index: int, upper: int) -> int:
    return max(0, min(index, upper))


# =============================================================================
# Task operations
# =============================================================================


def add_task(columns: Columns, column_id: str, task: Task) -> Result[Columns, BoardError]:
    """Append a task to the end of a column.

    The task's status is stamped with the column title so the
    status/column invariant holds regardless of what the caller passed.
    """
    index = _column_index(columns, column_id)
    if index is None:
        return Err(ColumnNotFound(column_id))

    checked = validate_task(task)
    if isinstance(checked, Err):
        return checked
    if locate_task(columns, task.id) is not None:
        return Err(ValidationFailed((f"Task '{task.id}' is already on the board",)))

    column = columns[index]
    placed = task.model_copy(update={"status": column.title})
    return Ok(_replace(columns, index, column.model_copy(update={"tasks": column.tasks + (placed,)})))


def update_task(columns: Columns, task: Task) -> Result[Columns, BoardError]:
    """Replace the task with the same id wherever it is on the board.

    If ``task.status`` now names a different column, the task is moved to
    the end of that column. A status naming no column is refused.
    """
    location = locate_task(columns, task.id)
    if location is None:
        return Err(TaskNotFound(task.id))

    checked = validate_task(task, columns)
    if isinstance(checked, Err):
        return checked

    col_index, task_index = location
    column = columns[col_index]
    # createdAt is immutable after creation
    task = task.model_copy(update={"created_at": column.tasks[task_index].created_at})

    if task.status == column.title:
        tasks = column.tasks[:task_index] + (task,) + column.tasks[task_index + 1:]
        return Ok(_replace(columns, col_index, column.model_copy(update={"tasks": tasks})))

    # Status changed to another column: relocate to keep the invariant.
    stripped = _replace(
        columns,
        col_index,
        column.model_copy(update={"tasks": column.tasks[:task_index] + column.tasks[task_index + 1:]}),
    )
    target_index = next(i for i, c in enumerate(stripped) if c.title == task.status)
    target = stripped[target_index]
    return Ok(_replace(stripped, target_index, target.model_copy(update={"tasks": target.tasks + (task,)})))


def delete_task(columns: Columns, task_id: str) -> Result[Columns, BoardError]:
    """Remove a task from whichever column holds it."""
    location = locate_task(columns, task_id)
    if location is None:
        return Err(TaskNotFound(task_id))
    col_index, task_index = location
    column = columns[col_index]
    tasks = column.tasks[:task_index] + column.tasks[task_index + 1:]
    return Ok(_replace(columns, col_index, column.model_copy(update={"tasks": tasks})))


def move_task(
    columns: Columns,
    task_id: str,
    from_column_id: str,
    to_column_id: str,
    to_index: int,
) -> Result[Columns, BoardError]:
    """Move a task between columns, or reorder it within one.

    ``to_index`` is the insert position in the destination list with the
    moved task already removed (list-splice semantics), clamped to the
    valid range. The task's status becomes the destination title.

    Examples:
        Reorder [a, b, c] moving ``a`` to index 2 gives [b, c, a].
    """
    source_index = _column_index(columns, from_column_id)
    if source_index is None:
        return Err(ColumnNotFound(from_column_id))
    dest_index = _column_index(columns, to_column_id)
    if dest_index is None:
        return Err(ColumnNotFound(to_column_id))

    source = columns[source_index]
    task_index = source.index_of(task_id)
    if task_index is None:
        return Err(TaskNotFound(task_id))

    dest = columns[dest_index]
    moved = source.tasks[task_index].model_copy(update={"status": dest.title})
    remaining = list(source.tasks[:task_index] + source.tasks[task_index + 1:])

    if source_index == dest_index:
        remaining.insert(_clamp(to_index, len(remaining)), moved)
        return Ok(_replace(columns, source_index, source.model_copy(update={"tasks": tuple(remaining)})))

    dest_tasks = list(dest.tasks)
    dest_tasks.insert(_clamp(to_index, len(dest_tasks)), moved)
    updated = _replace(columns, source_index, source.model_copy(update={"tasks": tuple(remaining)}))
    return Ok(_replace(updated, dest_index, dest.model_copy(update={"tasks": tuple(dest_tasks)})))


def copy_task(task: Task, clock: Clock = utc_now) -> Task:
    """Build a duplicate of a task with a fresh id and creation time.

    Subtasks, custom fields and status are carried over as-is.
    """
    return task.model_copy(
        update={
            "id": generate_id("task"),
            "title": f"{task.title} (Copy)",
            "created_at": isoformat(clock()),
        }
    )


def clear_tasks(columns: Columns) -> Columns:
    """Empty every column, keeping the columns themselves."""
    return tuple(column.model_copy(update={"tasks": ()}) for column in columns)


# =============================================================================
# Column operations
# =============================================================================


def add_column(
    columns: Columns,
    title: str,
    color: str = DEFAULT_COLUMN_COLOR,
    column_id: str | None = None,
) -> Result[Columns, BoardError]:
    """Append a new, empty column. Blank or duplicate titles are refused."""
    if is_blank(title):
        return Err(ValidationFailed(("Column title must not be empty",)))
    title = title.strip()
    if find_column_by_title(columns, title) is not None:
        return Err(DuplicateColumnTitle(title))
    column = Column(id=column_id or generate_id("column"), title=title, color=color)
    return Ok(columns + (column,))


def update_column(
    columns: Columns,
    column_id: str,
    *,
    title: str | None = None,
    color: str | None = None,
) -> Result[Columns, BoardError]:
    """Shallow-merge a title and/or color into a column.

    Renaming a column re-stamps the status of every task it holds.
    """
    index = _column_index(columns, column_id)
    if index is None:
        return Err(ColumnNotFound(column_id))

    column = columns[index]
    update: dict[str, object] = {}
    if color is not None:
        update["color"] = color
    if title is not None:
        if is_blank(title):
            return Err(ValidationFailed(("Column title must not be empty",)))
        title = title.strip()
        other = find_column_by_title(columns, title)
        if other is not None and other.id != column_id:
            return Err(DuplicateColumnTitle(title))
        update["title"] = title
        update["tasks"] = tuple(t.model_copy(update={"status": title}) for t in column.tasks)

    return Ok(_replace(columns, index, column.model_copy(update=update)))


def delete_column(columns: Columns, column_id: str) -> Result[Columns, BoardError]:
    """Remove an empty column; a column holding tasks is refused."""
    index = _column_index(columns, column_id)
    if index is None:
        return Err(ColumnNotFound(column_id))
    column = columns[index]
    if column.tasks:
        return Err(ColumnNotEmpty(column_id, len(column.tasks)))
    return Ok(columns[:index] + columns[index + 1:])


# =============================================================================
# Invariants
# =============================================================================


def check_invariants(columns: Columns) -> list[str]:
    """List violations of the board invariants (empty list when sound).

    - column ids and titles are unique
    - no task id appears twice across columns
    - every task's status equals the title of the column holding it
    """
    problems: list[str] = []
    seen_ids: set[str] = set()
    seen_titles: set[str] = set()
    seen_tasks: set[str] = set()

    for column in columns:
        if column.id in seen_ids:
            problems.append(f"Duplicate column id '{column.id}'")
        if column.title in seen_titles:
            problems.append(f"Duplicate column title '{column.title}'")
        seen_ids.add(column.id)
        seen_titles.add(column.title)

        for task in column.tasks:
            if task.id in seen_tasks:
                problems.append(f"Task '{task.id}' appears in more than one place")
            seen_tasks.add(task.id)
            if task.status != column.title:
                problems.append(
                    f"Task '{task.id}' has status '{task.status}' but sits in '{column.title}'"
                )
    return problems
