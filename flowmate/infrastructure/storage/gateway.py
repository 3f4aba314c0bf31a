"""Persistence gateway contract.

Storage is flat: tasks in one collection, columns without their tasks,
rules in a third. ``load_all`` returns that flat ``Snapshot``; callers
regroup with ``Snapshot.to_columns``.

Every method may raise ``PersistenceError``.
"""

from typing import Protocol, runtime_checkable

from flowmate.domain.automation.models import Rule
from flowmate.domain.board.models import Columns, Task
from flowmate.domain.snapshot import Snapshot


@runtime_checkable
class PersistenceGateway(Protocol):
    """Async, independently failable storage for tasks, columns and rules."""

    async def load_all(self) -> Snapshot: ...

    async def replace_all_tasks_and_columns(self, columns: Columns) -> None:
        """Replace stored tasks and columns with the given arrangement."""
        ...

    async def replace_all_rules(self, rules: tuple[Rule, ...]) -> None: ...

    async def add_task(self, task: Task) -> None: ...

    async def update_task(self, task: Task) -> None: ...

    async def delete_task(self, task_id: str) -> None: ...

    async def export_all(self) -> Snapshot: ...

    async def import_all(self, snapshot: Snapshot) -> None:
        """Replace everything with the snapshot."""
        ...

    async def clear_tasks(self) -> None:
        """Delete every task; columns and rules are kept."""
        ...
