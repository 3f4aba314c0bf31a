"""Drop handling and the manual-move window.

A drop moves the task immediately and opens a short window during which
automation stays quiet, so a rule does not snatch a task the user just
placed. Each further drop restarts the window. When it closes the
reconciler tells its listeners, and automation looks at the settled
board again.

    IDLE --drop--> MANUAL_MOVE_WINDOW --quiet for window_seconds--> IDLE
                          |  ^
                          +--+ drop (restart timer)
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from flowmate.application.board_store import BoardStore
from flowmate.application.timers import RestartableTimer
from flowmate.domain.board import BoardError, Columns
from flowmate.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SECONDS = 2.0


class DragPhase(str, Enum):
    IDLE = "idle"
    MANUAL_MOVE_WINDOW = "manual-move-window"


@dataclass(frozen=True, slots=True)
class DropEvent:
    """What the drag surface reports when an item is released.

    ``destination_container_id`` is None when the item was dropped
    outside any column.
    """

    source_container_id: str
    source_index: int
    destination_container_id: str | None
    destination_index: int
    dragged_item_id: str


class DragReconciler:
    """Turns drops into ``move_task`` calls and owns the suppression state."""

    def __init__(self, store: BoardStore, window_seconds: float = DEFAULT_WINDOW_SECONDS) -> None:
        self._store = store
        self._phase = DragPhase.IDLE
        self._timer = RestartableTimer(window_seconds, self._close_window, name="manual-move window")
        self._listeners: list[Callable[[], None]] = []

    @property
    def phase(self) -> DragPhase:
        return self._phase

    @property
    def suppressing(self) -> bool:
        """True while automation must not run."""
        return self._phase is DragPhase.MANUAL_MOVE_WINDOW

    def on_window_closed(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def handle_drop(self, event: DropEvent) -> Result[Columns, BoardError]:
        """Apply a drop.

        Drops outside any column, and drops back onto the same slot, change
        nothing and leave the window alone.
        Any other drop must happen inside a running event loop; outside one
        it raises ``RuntimeError`` and leaves the board and phase as they were.
        """
        if event.destination_container_id is None:
            return Ok(self._store.columns)
        if (
            event.destination_container_id == event.source_container_id
            and event.destination_index == event.source_index
        ):
            return Ok(self._store.columns)

        # The window timer needs a loop; fail before anything changes.
        asyncio.get_running_loop()

        # Enter the window before the store notifies anyone.
        previous = self._phase
        self._phase = DragPhase.MANUAL_MOVE_WINDOW

        result = self._store.move_task(
            event.dragged_item_id,
            event.source_container_id,
            event.destination_container_id,
            event.destination_index,
        )
        if isinstance(result, Err):
            self._phase = previous
            return result

        self._timer.restart()
        return result

    def _close_window(self) -> None:
        self._phase = DragPhase.IDLE
        logger.debug("Manual-move window closed")
        for listener in list(self._listeners):
            listener()

    def close(self) -> None:
        """Drop any pending window without notifying listeners."""
        self._timer.cancel()
        self._phase = DragPhase.IDLE
