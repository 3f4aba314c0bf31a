# tests/test_drag.py

import asyncio

import pytest

from flowmate.application.automation import AutomationRunner
from flowmate.application.board_store import BoardStore
from flowmate.application.drag import DragPhase, DragReconciler, DropEvent
from flowmate.domain.shared.result import Err, Ok

from .fakes import FixedClock, ids, make_task, overdue_rule

WINDOW = 0.1


def _drop(task_id, source, source_index, destination, destination_index) -> DropEvent:
    return DropEvent(
        source_container_id=source,
        source_index=source_index,
        destination_container_id=destination,
        destination_index=destination_index,
        dragged_item_id=task_id,
    )


def _wired(board, sink, rules=()):
    store = BoardStore(board, tuple(rules), clock=FixedClock())
    reconciler = DragReconciler(store, window_seconds=WINDOW)
    runner = AutomationRunner(store, sink, reconciler, clock=FixedClock())
    runner.enabled = True
    return store, reconciler, runner


@pytest.mark.asyncio
async def test_drop_moves_task_and_opens_window(board, sink) -> None:
    store, reconciler, _ = _wired(board, sink)

    # A[0] -> B[2]: B has one task, so the index clamps to the end
    result = reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-doing", 2))

    assert isinstance(result, Ok)
    assert ids(store.columns[0]) == ["t2"]
    assert ids(store.columns[1]) == ["t3", "t1"]
    assert store.columns[1].tasks[-1].status == "In Progress"
    assert reconciler.phase is DragPhase.MANUAL_MOVE_WINDOW

    await asyncio.sleep(WINDOW * 2)
    assert reconciler.phase is DragPhase.IDLE


@pytest.mark.asyncio
async def test_drop_outside_or_in_place_is_a_no_op(board, sink) -> None:
    store, reconciler, _ = _wired(board, sink)
    events: list = []
    store.subscribe(events.append)

    assert reconciler.handle_drop(_drop("t1", "col-todo", 0, None, 0)) == Ok(board)
    assert reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-todo", 0)) == Ok(board)

    assert events == []
    assert reconciler.phase is DragPhase.IDLE


@pytest.mark.asyncio
async def test_failed_drop_does_not_open_window(board, sink) -> None:
    _, reconciler, _ = _wired(board, sink)

    result = reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-missing", 0))

    assert isinstance(result, Err)
    assert reconciler.phase is DragPhase.IDLE


@pytest.mark.asyncio
async def test_automation_waits_for_the_window_to_close(board, sink) -> None:
    # t1 is overdue; dragging it into In Progress must stick until the window closes
    late = make_task("t1", "To Do", "Write report", due_date="2024-04-01T00:00:00.000Z")
    board = (board[0].model_copy(update={"tasks": (late,) + board[0].tasks[1:]}),) + board[1:]
    store, reconciler, runner = _wired(board, sink, rules=[overdue_rule()])

    reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-doing", 0))

    assert ids(store.columns[1]) == ["t1", "t3"]
    assert sink.notifications == []

    await asyncio.sleep(WINDOW * 2)

    assert ids(store.columns[1]) == ["t3"]
    assert ids(store.columns[2]) == ["t1"]
    assert sink.titles == ["Task moved automatically"]
    assert runner.history[0].task_id == "t1"


@pytest.mark.asyncio
async def test_second_drop_restarts_the_window(board, sink) -> None:
    _, reconciler, _ = _wired(board, sink)

    reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-doing", 0))
    await asyncio.sleep(WINDOW * 0.6)
    reconciler.handle_drop(_drop("t2", "col-todo", 0, "col-doing", 0))
    await asyncio.sleep(WINDOW * 0.6)

    # first window would have closed by now
    assert reconciler.phase is DragPhase.MANUAL_MOVE_WINDOW

    await asyncio.sleep(WINDOW)
    assert reconciler.phase is DragPhase.IDLE


@pytest.mark.asyncio
async def test_window_closing_notifies_listeners(board, sink) -> None:
    _, reconciler, _ = _wired(board, sink)
    closed: list[bool] = []
    reconciler.on_window_closed(lambda: closed.append(True))

    reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-done", 0))
    await asyncio.sleep(WINDOW * 2)

    assert closed == [True]


@pytest.mark.asyncio
async def test_close_cancels_pending_window(board, sink) -> None:
    _, reconciler, _ = _wired(board, sink)
    closed: list[bool] = []
    reconciler.on_window_closed(lambda: closed.append(True))

    reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-done", 0))
    reconciler.close()
    await asyncio.sleep(WINDOW * 2)

    assert reconciler.phase is DragPhase.IDLE
    assert closed == []


def test_drop_outside_an_event_loop_changes_nothing(board, sink) -> None:
    store, reconciler, _ = _wired(board, sink)
    events: list = []
    store.subscribe(events.append)

    with pytest.raises(RuntimeError):
        reconciler.handle_drop(_drop("t1", "col-todo", 0, "col-doing", 0))

    assert store.columns == board
    assert events == []
    assert reconciler.phase is DragPhase.IDLE
