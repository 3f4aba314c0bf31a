"""Board session: one open board and everything attached to it.

Wires the store to the drag reconciler, the automation runner and the
autosave scheduler, and runs the whole-board operations that talk to
storage directly (startup load, export, import, clearing tasks).

Typical use:
    session = BoardSession(JsonFileGateway(path))
    await session.start()
    session.store.add_task("column-1", Task(title="Write report"))
    await session.close()
"""

import asyncio
import logging
from typing import Any

from flowmate.application.automation import AutomationRunner
from flowmate.application.autosave import AutosaveScheduler
from flowmate.application.board_store import BoardStore
from flowmate.application.drag import DragReconciler, DropEvent
from flowmate.application.notifications import (
    LoggingNotificationSink,
    NotificationSink,
    error,
    success,
)
from flowmate.config import Settings
from flowmate.domain.automation.engine import AutomationOutcome
from flowmate.domain.board import BoardError, Columns, ImportFailed, clear_tasks
from flowmate.domain.seed import default_columns, default_rules
from flowmate.domain.shared.ids import Clock, utc_now
from flowmate.domain.shared.result import Err, Ok, Result
from flowmate.domain.snapshot import Snapshot, parse_snapshot
from flowmate.infrastructure.storage.errors import PersistenceError
from flowmate.infrastructure.storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


class BoardSession:
    """A started board backed by a persistence gateway."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        settings: Settings | None = None,
        sink: NotificationSink | None = None,
        clock: Clock = utc_now,
    ) -> None:
        settings = settings or Settings()
        self.gateway = gateway
        self.settings = settings
        self.sink = sink or LoggingNotificationSink()
        self._clock = clock

        self.store = BoardStore(clock=clock)
        self.reconciler = DragReconciler(self.store, settings.manual_move_window_seconds)
        self.autosave = AutosaveScheduler(self.store, gateway, self.sink, settings.autosave_debounce_seconds)
        self.automation = AutomationRunner(
            self.store,
            self.sink,
            self.reconciler,
            clock=clock,
            completed_status=settings.completed_status,
        )
        self.initialized = False
        self.load_failed = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self, *, automate: bool = True) -> None:
        """Load the board once; seed defaults if storage has no columns.

        A failed load is reported and leaves an empty board with
        ``load_failed`` set. Nothing is seeded in that case, so the stored
        data is not overwritten. With ``automate=False`` the automation
        runner stays switched off.
        """
        if self.initialized:
            return

        try:
            snapshot = await self.gateway.load_all()
        except PersistenceError as e:
            logger.error(f"Initial load failed: {e}")
            self.sink.notify(error("Failed to load data", e.reason))
            self.load_failed = True
            self.store.load((), ())
        else:
            if snapshot.is_empty:
                await self._seed()
            else:
                self.store.load(snapshot.to_columns(), snapshot.rules)
                logger.info(
                    f"Loaded {len(snapshot.columns)} column(s), {len(snapshot.tasks)} task(s), "
                    f"{len(snapshot.rules)} rule(s)"
                )

        self.initialized = True
        self.autosave.enabled = True
        if automate:
            self.automation.enabled = True
            self.automation.run()

    async def _seed(self) -> None:
        columns = default_columns(self._clock)
        rules = default_rules()
        self.store.load(columns, rules)
        try:
            await asyncio.gather(
                self.gateway.replace_all_tasks_and_columns(columns),
                self.gateway.replace_all_rules(rules),
            )
        except PersistenceError as e:
            logger.error(f"Saving sample data failed: {e}")
            self.sink.notify(error("Failed to save changes", e.reason))
            return
        self.sink.notify(success("Welcome! Sample data has been created."))

    async def reset_to_defaults(self) -> Result[Columns, str]:
        """Replace the whole board with the default columns, tasks and rules."""
        columns = default_columns(self._clock)
        rules = default_rules()
        await self.autosave.flush_now()
        try:
            await self.gateway.import_all(Snapshot.from_board(columns, rules))
        except PersistenceError as e:
            logger.error(f"Reset failed: {e}")
            self.sink.notify(error("Failed to save changes", e.reason))
            return Err(e.reason)
        self.store.load(columns, rules)
        self.sink.notify(success("Welcome! Sample data has been created."))
        return Ok(self.store.columns)

    async def close(self) -> None:
        """Write anything pending and stop all timers."""
        await self.autosave.flush_now()
        self.autosave.close()
        self.reconciler.close()

    # =========================================================================
    # Interaction
    # =========================================================================

    def handle_drop(self, event: DropEvent) -> Result[Columns, BoardError]:
        return self.reconciler.handle_drop(event)

    def run_automation(self) -> AutomationOutcome | None:
        return self.automation.run()

    # =========================================================================
    # Whole-board data operations
    # =========================================================================

    async def export_data(self) -> Result[Snapshot, str]:
        """Snapshot of stored data, after pending autosaves are written."""
        await self.autosave.flush_now()
        try:
            snapshot = await self.gateway.export_all()
        except PersistenceError as e:
            logger.error(f"Export failed: {e}")
            self.sink.notify(error("Failed to export data", e.reason))
            return Err(e.reason)
        self.sink.notify(success("Data exported successfully"))
        return Ok(snapshot)

    async def import_data(self, data: Any) -> Result[Snapshot, BoardError]:
        """Replace everything with a decoded backup document.

        Malformed content is refused before anything is written, and the
        board stays as it was.
        """
        parsed = parse_snapshot(data)
        if isinstance(parsed, Err):
            logger.warning(f"Import rejected: {parsed.error}")
            self.sink.notify(error("Import failed", "Invalid file format or corrupted data"))
            return parsed
        snapshot = parsed.value

        await self.autosave.flush_now()
        try:
            await self.gateway.import_all(snapshot)
        except PersistenceError as e:
            logger.error(f"Import failed: {e}")
            self.sink.notify(error("Failed to import data", e.reason))
            return Err(ImportFailed(e.reason))

        self.store.load(snapshot.to_columns(), snapshot.rules)
        self.sink.notify(success("Data imported successfully"))
        return Ok(snapshot)

    async def clear_tasks(self) -> Result[Columns, str]:
        """Delete every task, in storage and on the board. Columns and rules stay."""
        await self.autosave.flush_now()
        try:
            await self.gateway.clear_tasks()
        except PersistenceError as e:
            logger.error(f"Clearing tasks failed: {e}")
            self.sink.notify(error("Failed to clear data", e.reason))
            return Err(e.reason)

        self.store.load(clear_tasks(self.store.columns), self.store.rules)
        self.sink.notify(success("All data cleared successfully"))
        return Ok(self.store.columns)
