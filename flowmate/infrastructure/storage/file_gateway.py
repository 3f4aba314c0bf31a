"""Gateway that keeps the whole board in one JSON file.

The file uses the backup format (``{"tasks", "columns", "rules"}``), so
an exported backup can be used directly as a data file. Blocking file
I/O runs in a worker thread; a lock serializes read-modify-write
cycles so fire-and-forget calls cannot interleave.
"""

import asyncio
import logging
from pathlib import Path

from flowmate.domain.automation.models import Rule
from flowmate.domain.board.models import Columns, Task
from flowmate.domain.shared.result import Err
from flowmate.domain.snapshot import Snapshot, parse_snapshot
from flowmate.infrastructure.storage.errors import PersistenceError
from flowmate.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)


class JsonFileGateway:
    """Persistence gateway over a single JSON document."""

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        self.path = Path(path)
        self._storage = storage or JsonStorage()
        self._lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # File access (runs in a worker thread)
    # -------------------------------------------------------------------------

    def _read(self, operation: str) -> Snapshot:
        if not self.path.exists():
            return Snapshot()
        loaded = self._storage.load_json(self.path)
        if isinstance(loaded, Err):
            raise PersistenceError(operation, loaded.error)
        parsed = parse_snapshot(loaded.value)
        if isinstance(parsed, Err):
            raise PersistenceError(operation, f"{self.path}: {parsed.error.message}")
        return parsed.value

    def _write(self, operation: str, snapshot: Snapshot) -> None:
        saved = self._storage.save_json(self.path, snapshot.to_wire())
        if isinstance(saved, Err):
            raise PersistenceError(operation, saved.error)

    async def _modify(self, operation: str, change) -> None:
        """Read, apply ``change(snapshot) -> snapshot`` and write back."""
        async with self._lock:
            current = await asyncio.to_thread(self._read, operation)
            await asyncio.to_thread(self._write, operation, change(current))
        logger.debug(f"{operation} -> {self.path}")

    # -------------------------------------------------------------------------
    # Gateway operations
    # -------------------------------------------------------------------------

    async def load_all(self) -> Snapshot:
        async with self._lock:
            return await asyncio.to_thread(self._read, "load_all")

    async def replace_all_tasks_and_columns(self, columns: Columns) -> None:
        flat = Snapshot.from_board(columns)
        await self._modify(
            "replace_all_tasks_and_columns",
            lambda s: s.model_copy(update={"tasks": flat.tasks, "columns": flat.columns}),
        )

    async def replace_all_rules(self, rules: tuple[Rule, ...]) -> None:
        await self._modify("replace_all_rules", lambda s: s.model_copy(update={"rules": tuple(rules)}))

    async def add_task(self, task: Task) -> None:
        await self._modify(
            "add_task",
            lambda s: s.model_copy(update={"tasks": tuple(t for t in s.tasks if t.id != task.id) + (task,)}),
        )

    async def update_task(self, task: Task) -> None:
        def change(s: Snapshot) -> Snapshot:
            if not any(t.id == task.id for t in s.tasks):
                return s.model_copy(update={"tasks": s.tasks + (task,)})
            return s.model_copy(update={"tasks": tuple(task if t.id == task.id else t for t in s.tasks)})

        await self._modify("update_task", change)

    async def delete_task(self, task_id: str) -> None:
        await self._modify(
            "delete_task",
            lambda s: s.model_copy(update={"tasks": tuple(t for t in s.tasks if t.id != task_id)}),
        )

    async def export_all(self) -> Snapshot:
        async with self._lock:
            return await asyncio.to_thread(self._read, "export_all")

    async def import_all(self, snapshot: Snapshot) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write, "import_all", snapshot)

    async def clear_tasks(self) -> None:
        await self._modify("clear_tasks", lambda s: s.model_copy(update={"tasks": ()}))
