# tests/test_autosave.py

import asyncio

import pytest

from flowmate.application.autosave import AutosaveScheduler
from flowmate.application.board_store import BoardStore
from flowmate.domain.board.models import Task
from flowmate.infrastructure.storage.memory_gateway import InMemoryGateway

from .fakes import FixedClock, make_task, overdue_rule

DEBOUNCE = 0.05


def _scheduler(board, sink, gateway=None):
    gateway = gateway or InMemoryGateway()
    store = BoardStore(board, (overdue_rule(),), clock=FixedClock())
    autosave = AutosaveScheduler(store, gateway, sink, debounce_seconds=DEBOUNCE)
    autosave.enabled = True
    return store, gateway, autosave


@pytest.mark.asyncio
async def test_changes_are_coalesced_into_one_write(board, sink) -> None:
    store, gateway, _ = _scheduler(board, sink)

    store.move_task("t1", "col-todo", "col-doing", 0)
    store.update_column("col-blocked", title="Waiting")
    store.delete_task("t2")
    assert gateway.calls == []

    await asyncio.sleep(DEBOUNCE * 3)

    assert gateway.calls == ["replace_all_tasks_and_columns"]
    stored = gateway.snapshot
    assert {t.id for t in stored.tasks} == {"t1", "t3"}
    assert [c.title for c in stored.columns] == ["To Do", "In Progress", "Waiting", "Completed"]
    assert all(c.tasks == () for c in stored.columns)


@pytest.mark.asyncio
async def test_each_change_restarts_the_wait(board, sink) -> None:
    store, gateway, _ = _scheduler(board, sink)

    store.move_task("t1", "col-todo", "col-doing", 0)
    await asyncio.sleep(DEBOUNCE * 0.6)
    store.move_task("t2", "col-todo", "col-doing", 0)
    await asyncio.sleep(DEBOUNCE * 0.6)

    assert gateway.calls == []

    await asyncio.sleep(DEBOUNCE * 2)
    assert gateway.calls == ["replace_all_tasks_and_columns"]


@pytest.mark.asyncio
async def test_rules_have_their_own_lane(board, sink) -> None:
    store, gateway, _ = _scheduler(board, sink)

    store.update_rule("rule-overdue", enabled=False)
    store.move_task("t1", "col-todo", "col-done", 0)
    await asyncio.sleep(DEBOUNCE * 3)

    assert sorted(gateway.calls) == ["replace_all_rules", "replace_all_tasks_and_columns"]
    assert gateway.snapshot.rules[0].enabled is False


@pytest.mark.asyncio
async def test_new_task_is_written_at_once(board, sink) -> None:
    store, gateway, autosave = _scheduler(board, sink)

    store.move_task("t1", "col-todo", "col-doing", 0)
    store.add_task("col-todo", Task(id="t9", title="Call supplier"))
    await asyncio.sleep(0)

    # pending columns write was folded into the immediate one
    assert gateway.calls == ["replace_all_tasks_and_columns"]
    assert "t9" in {t.id for t in gateway.snapshot.tasks}

    await asyncio.sleep(DEBOUNCE * 3)
    assert gateway.calls == ["replace_all_tasks_and_columns"]
    assert not autosave.pending


@pytest.mark.asyncio
async def test_failed_write_is_reported_and_state_kept(board, sink) -> None:
    gateway = InMemoryGateway(fail_on={"replace_all_tasks_and_columns"})
    store, _, _ = _scheduler(board, sink, gateway)

    store.delete_task("t1")
    await asyncio.sleep(DEBOUNCE * 3)

    assert [n.title for n in sink.errors] == ["Failed to save changes"]
    assert sink.errors[0].description == "injected failure"
    assert "t1" not in {t.id for c in store.columns for t in c.tasks}


@pytest.mark.asyncio
async def test_failed_rules_write_has_its_own_message(board, sink) -> None:
    gateway = InMemoryGateway(fail_on={"replace_all_rules"})
    store, _, _ = _scheduler(board, sink, gateway)

    store.delete_rule("rule-overdue")
    await asyncio.sleep(DEBOUNCE * 3)

    assert sink.titles == ["Failed to save automation rules"]
    assert store.rules == ()


@pytest.mark.asyncio
async def test_loaded_state_is_not_written_back(board, sink) -> None:
    store, gateway, _ = _scheduler(board, sink)

    store.load(board, ())
    await asyncio.sleep(DEBOUNCE * 3)

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_nothing_is_written_until_enabled(board, sink) -> None:
    store, gateway, autosave = _scheduler(board, sink)
    autosave.enabled = False

    store.delete_task("t1")
    store.add_task("col-todo", make_task("t9", "To Do"))
    await asyncio.sleep(DEBOUNCE * 3)

    assert gateway.calls == []


@pytest.mark.asyncio
async def test_flush_now_writes_pending_lanes(board, sink) -> None:
    store, gateway, autosave = _scheduler(board, sink)

    store.delete_task("t1")
    store.delete_rule("rule-overdue")
    assert autosave.pending

    await autosave.flush_now()

    assert sorted(gateway.calls) == ["replace_all_rules", "replace_all_tasks_and_columns"]
    assert not autosave.pending


@pytest.mark.asyncio
async def test_close_drops_waiting_lanes(board, sink) -> None:
    store, gateway, autosave = _scheduler(board, sink)

    store.delete_task("t1")
    autosave.close()
    await asyncio.sleep(DEBOUNCE * 3)

    assert gateway.calls == []
