"""Application layer for FlowMate.

Stateful services that sit on top of the pure domain: the board store
owns the state, the others subscribe to it.

Services:
    board_store - authoritative board state with change notifications
    drag - drop handling and the manual-move window
    automation - runs the rule engine after every settled change
    autosave - debounced persistence lanes
    session - wires the above to a persistence gateway

Example usage:
    >>> import asyncio
    >>> from flowmate.application import BoardSession
    >>> from flowmate.infrastructure.storage import InMemoryGateway
    >>>
    >>> session = BoardSession(InMemoryGateway())
    >>> asyncio.run(session.start())
"""

from flowmate.application.automation import AutomationRunner
from flowmate.application.autosave import AutosaveScheduler
from flowmate.application.board_store import BoardStore
from flowmate.application.drag import DragPhase, DragReconciler, DropEvent
from flowmate.application.notifications import (
    LoggingNotificationSink,
    Notification,
    NotificationLevel,
    NotificationSink,
)
from flowmate.application.session import BoardSession
from flowmate.application.timers import RestartableTimer

__all__ = [
    # State
    "BoardStore",
    # Drag and drop
    "DropEvent",
    "DragPhase",
    "DragReconciler",
    # Subscribers
    "AutomationRunner",
    "AutosaveScheduler",
    "RestartableTimer",
    # Notifications
    "Notification",
    "NotificationLevel",
    "NotificationSink",
    "LoggingNotificationSink",
    # Session
    "BoardSession",
]
