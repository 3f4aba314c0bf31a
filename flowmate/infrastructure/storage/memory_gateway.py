"""Dict-backed gateway for tests and throwaway boards."""

import logging

from flowmate.domain.automation.models import Rule
from flowmate.domain.board.models import Column, Columns, Task
from flowmate.domain.snapshot import Snapshot
from flowmate.infrastructure.storage.errors import PersistenceError

logger = logging.getLogger(__name__)


class InMemoryGateway:
    """Keeps the flat snapshot in memory.

    Operations named in ``fail_on`` raise ``PersistenceError``; ``calls``
    records every operation in order.

    Example:
        gateway = InMemoryGateway(fail_on={"replace_all_rules"})
    """

    def __init__(self, snapshot: Snapshot | None = None, fail_on: set[str] | None = None) -> None:
        self._tasks: dict[str, Task] = {}
        self._columns: tuple[Column, ...] = ()
        self._rules: tuple[Rule, ...] = ()
        self.fail_on: set[str] = set(fail_on or ())
        self.calls: list[str] = []
        if snapshot is not None:
            self._store(snapshot)

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(operation, "injected failure")

    def _store(self, snapshot: Snapshot) -> None:
        self._tasks = {task.id: task for task in snapshot.tasks}
        self._columns = snapshot.columns
        self._rules = snapshot.rules

    def _snapshot(self) -> Snapshot:
        return Snapshot(tasks=tuple(self._tasks.values()), columns=self._columns, rules=self._rules)

    @property
    def snapshot(self) -> Snapshot:
        """Current stored content (no call recorded)."""
        return self._snapshot()

    async def load_all(self) -> Snapshot:
        self._check("load_all")
        return self._snapshot()

    async def replace_all_tasks_and_columns(self, columns: Columns) -> None:
        self._check("replace_all_tasks_and_columns")
        flat = Snapshot.from_board(columns)
        self._tasks = {task.id: task for task in flat.tasks}
        self._columns = flat.columns

    async def replace_all_rules(self, rules: tuple[Rule, ...]) -> None:
        self._check("replace_all_rules")
        self._rules = tuple(rules)

    async def add_task(self, task: Task) -> None:
        self._check("add_task")
        self._tasks[task.id] = task

    async def update_task(self, task: Task) -> None:
        self._check("update_task")
        self._tasks[task.id] = task

    async def delete_task(self, task_id: str) -> None:
        self._check("delete_task")
        self._tasks.pop(task_id, None)

    async def export_all(self) -> Snapshot:
        self._check("export_all")
        return self._snapshot()

    async def import_all(self, snapshot: Snapshot) -> None:
        self._check("import_all")
        self._store(snapshot)

    async def clear_tasks(self) -> None:
        self._check("clear_tasks")
        self._tasks = {}
