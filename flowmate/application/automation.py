"""Automation runner: re-files tasks whenever the board settles.

Subscribes to the store and runs the rule engine to a settled board after every
change, unless it is switched off, a manual-move window is open, or it
is already inside its own pass (its batch apply is itself a change).
"""

import logging

from flowmate.application.board_store import BoardStore
from flowmate.application.drag import DragReconciler
from flowmate.application.notifications import NotificationSink, success
from flowmate.domain.automation.engine import AutomationOutcome, settle_automation
from flowmate.domain.automation.events import TaskAutoMoved
from flowmate.domain.board import COMPLETED_STATUS, BoardChanged
from flowmate.domain.shared.ids import Clock, utc_now

logger = logging.getLogger(__name__)


class AutomationRunner:
    """Keeps the board in line with the enabled rules.

    ``enabled`` starts False; the session switches it on once the initial
    load is done.
    """

    def __init__(
        self,
        store: BoardStore,
        sink: NotificationSink,
        reconciler: DragReconciler | None = None,
        clock: Clock = utc_now,
        completed_status: str = COMPLETED_STATUS,
    ) -> None:
        self._store = store
        self._sink = sink
        self._reconciler = reconciler
        self._clock = clock
        self._completed_status = completed_status
        self._running = False
        self.enabled = False
        self.history: list[TaskAutoMoved] = []

        store.subscribe(self._on_change)
        if reconciler is not None:
            reconciler.on_window_closed(self.run)

    def _on_change(self, event: BoardChanged) -> None:
        self.run()

    def run(self) -> AutomationOutcome | None:
        """Run the engine until the board settles. Returns None when skipped."""
        if not self.enabled or self._running:
            return None
        if self._reconciler is not None and self._reconciler.suppressing:
            logger.debug("Automation skipped: manual-move window open")
            return None

        self._running = True
        try:
            outcome = settle_automation(
                self._store.columns,
                self._store.rules,
                self._clock(),
                self._completed_status,
            )
            if outcome.changed:
                self._store.replace_columns(outcome.columns, operation="automation")
                for moved in outcome.moved:
                    logger.info(f"Automation: {moved.description}")
                    self.history.append(moved)
                    self._sink.notify(success("Task moved automatically", moved.description))
            return outcome
        finally:
            self._running = False
