"""Flat board snapshot used for storage and backup files.

Storage keeps tasks in one flat list and columns with empty task lists;
the nested arrangement is rebuilt from each task's status on load.
The wire shape is ``{"tasks": [...], "columns": [...], "rules": [...]}``.
"""

import logging
from datetime import UTC, date, datetime
from typing import Any

from pydantic import ValidationError

from flowmate.domain.automation.models import Rule
from flowmate.domain.board.errors import ImportFailed
from flowmate.domain.board.models import BoardModel, Column, Columns, Task
from flowmate.domain.board.operations import all_tasks
from flowmate.domain.shared.ids import parse_timestamp
from flowmate.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "flowmate-backup"
_LATEST = datetime.max.replace(tzinfo=UTC)


class Snapshot(BoardModel):
    """Everything on the board, flattened."""

    tasks: tuple[Task, ...] = ()
    columns: tuple[Column, ...] = ()
    rules: tuple[Rule, ...] = ()

    @classmethod
    def from_board(cls, columns: Columns, rules: tuple[Rule, ...] | list[Rule] = ()) -> "Snapshot":
        """Flatten a nested arrangement; columns are stored without tasks."""
        return cls(
            tasks=tuple(all_tasks(columns)),
            columns=tuple(column.model_copy(update={"tasks": ()}) for column in columns),
            rules=tuple(rules),
        )

    def to_columns(self) -> Columns:
        return group_tasks_into_columns(self.columns, self.tasks)

    @property
    def is_empty(self) -> bool:
        return not self.columns


def group_tasks_into_columns(columns: tuple[Column, ...], tasks: tuple[Task, ...]) -> Columns:
    """Rebuild the nested arrangement from flat storage.

    Each column receives the tasks whose status equals its title, oldest
    first by parsed creation time (stable on ties). Tasks whose status
    names no column are dropped and logged.
    """
    by_status: dict[str, list[Task]] = {column.title: [] for column in columns}
    for task in tasks:
        bucket = by_status.get(task.status)
        if bucket is None:
            logger.warning(f"Dropping task {task.id} ('{task.title}'): no column titled '{task.status}'")
            continue
        bucket.append(task)

    return tuple(
        column.model_copy(update={"tasks": tuple(sorted(by_status[column.title], key=_creation_order))})
        for column in columns
    )


def _creation_order(task: Task) -> datetime:
    # unparseable creation times sort last
    return parse_timestamp(task.created_at) or _LATEST


def backup_filename(today: date) -> str:
    """Export file name, e.g. ``flowmate-backup-2024-05-01.json``."""
    return f"{BACKUP_PREFIX}-{today.isoformat()}.json"


def parse_snapshot(data: Any) -> Result[Snapshot, ImportFailed]:
    """Validate decoded backup JSON.

    All three collections must be present; anything else about the
    document is checked by the models.
    """
    if not isinstance(data, dict):
        return Err(ImportFailed("expected a JSON object"))
    missing = [key for key in ("tasks", "columns", "rules") if key not in data]
    if missing:
        return Err(ImportFailed(f"missing {', '.join(missing)}"))
    try:
        return Ok(Snapshot.model_validate(data))
    except ValidationError as e:
        return Err(ImportFailed(f"{e.error_count()} invalid field(s): {e.errors()[0]['msg']}"))
