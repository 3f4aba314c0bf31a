"""Debounced persistence of board changes.

Two independent lanes, one for columns+tasks and one for rules. A change
restarts its lane's timer; when the timer fires the whole lane is
written with a replace-all call. A newly created task skips the wait:
the columns lane is written at once and its pending timer dropped.

Writes are fire-and-forget tasks. A failed write is logged and reported
to the notification sink; in-memory state is never rolled back.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from flowmate.application.board_store import BoardStore
from flowmate.application.notifications import NotificationSink, error
from flowmate.application.timers import RestartableTimer
from flowmate.domain.board import BoardChanged, ChangeKind
from flowmate.infrastructure.storage.errors import PersistenceError
from flowmate.infrastructure.storage.gateway import PersistenceGateway

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.0


class AutosaveScheduler:
    """Writes the store's state to the gateway after it has been quiet."""

    def __init__(
        self,
        store: BoardStore,
        gateway: PersistenceGateway,
        sink: NotificationSink,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._sink = sink
        self._columns_timer = RestartableTimer(
            debounce_seconds, lambda: self._spawn(self._save_columns), name="columns autosave"
        )
        self._rules_timer = RestartableTimer(
            debounce_seconds, lambda: self._spawn(self._save_rules), name="rules autosave"
        )
        self._inflight: set[asyncio.Task] = set()
        self.enabled = False

        store.subscribe(self._on_change)

    @property
    def pending(self) -> bool:
        """True while a lane is waiting or a write is in flight."""
        return self._columns_timer.pending or self._rules_timer.pending or bool(self._inflight)

    def _on_change(self, event: BoardChanged) -> None:
        if not self.enabled:
            return
        match event.kind:
            case ChangeKind.TASK_CREATED:
                self._columns_timer.cancel()
                self._spawn(self._save_columns)
            case ChangeKind.COLUMNS:
                self._columns_timer.restart()
            case ChangeKind.RULES:
                self._rules_timer.restart()
            case ChangeKind.LOADED:
                pass

    def _spawn(self, save: Callable[[], Awaitable[None]]) -> None:
        task = asyncio.get_running_loop().create_task(save())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _save_columns(self) -> None:
        try:
            await self._gateway.replace_all_tasks_and_columns(self._store.columns)
        except PersistenceError as e:
            logger.error(f"Autosave of columns failed: {e}")
            self._sink.notify(error("Failed to save changes", e.reason))

    async def _save_rules(self) -> None:
        try:
            await self._gateway.replace_all_rules(self._store.rules)
        except PersistenceError as e:
            logger.error(f"Autosave of rules failed: {e}")
            self._sink.notify(error("Failed to save automation rules", e.reason))

    async def flush_now(self) -> None:
        """Write any waiting lane immediately and wait for all writes."""
        if self._columns_timer.pending:
            self._columns_timer.cancel()
            self._spawn(self._save_columns)
        if self._rules_timer.pending:
            self._rules_timer.cancel()
            self._spawn(self._save_rules)
        while self._inflight:
            await asyncio.gather(*list(self._inflight))

    def close(self) -> None:
        """Cancel waiting lanes. In-flight writes are left to finish."""
        self._columns_timer.cancel()
        self._rules_timer.cancel()
