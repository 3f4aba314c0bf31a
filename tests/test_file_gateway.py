# tests/test_file_gateway.py

import json
from pathlib import Path

import pytest

from flowmate.domain.shared.result import Err, Ok
from flowmate.domain.snapshot import Snapshot
from flowmate.infrastructure.storage.errors import PersistenceError
from flowmate.infrastructure.storage.file_gateway import JsonFileGateway
from flowmate.infrastructure.storage.gateway import PersistenceGateway
from flowmate.infrastructure.storage.json_storage import JsonStorage
from flowmate.infrastructure.storage.memory_gateway import InMemoryGateway

from .fakes import make_board, make_task, overdue_rule


def test_gateways_satisfy_the_protocol(tmp_path: Path) -> None:
    assert isinstance(JsonFileGateway(tmp_path / "board.json"), PersistenceGateway)
    assert isinstance(InMemoryGateway(), PersistenceGateway)


@pytest.mark.asyncio
async def test_missing_file_loads_as_empty(tmp_path: Path) -> None:
    gateway = JsonFileGateway(tmp_path / "board.json")

    snapshot = await gateway.load_all()

    assert snapshot == Snapshot()
    assert snapshot.is_empty


@pytest.mark.asyncio
async def test_board_round_trips_through_the_file(tmp_path: Path) -> None:
    path = tmp_path / "data" / "board.json"
    gateway = JsonFileGateway(path)

    await gateway.replace_all_tasks_and_columns(make_board())
    await gateway.replace_all_rules((overdue_rule(),))
    snapshot = await gateway.load_all()

    assert snapshot.to_columns() == make_board()
    assert snapshot.rules == (overdue_rule(),)


@pytest.mark.asyncio
async def test_file_uses_wire_names(tmp_path: Path) -> None:
    path = tmp_path / "board.json"
    gateway = JsonFileGateway(path)
    task = make_task("t1", "To Do", due_date="2024-05-02T00:00:00.000Z", fields={"Priority": "High"})

    await gateway.add_task(task)
    await gateway.replace_all_rules((overdue_rule(),))

    document = json.loads(path.read_text(encoding="utf-8"))
    assert set(document) == {"tasks", "columns", "rules"}
    stored = document["tasks"][0]
    assert stored["dueDate"] == "2024-05-02T00:00:00.000Z"
    assert stored["createdAt"] == "2024-04-01T00:00:00.000Z"
    assert stored["customFields"][0]["name"] == "Priority"
    assert document["rules"][0]["condition"]["type"] == "due-date"
    assert document["rules"][0]["action"]["targetColumnId"] == "col-blocked"


@pytest.mark.asyncio
async def test_single_task_operations(tmp_path: Path) -> None:
    gateway = JsonFileGateway(tmp_path / "board.json")
    await gateway.replace_all_tasks_and_columns(make_board())

    await gateway.add_task(make_task("t4", "Blocked", "Call supplier"))
    await gateway.update_task(make_task("t1", "In Progress", "Write final report"))
    await gateway.delete_task("t2")

    tasks = {t.id: t for t in (await gateway.load_all()).tasks}
    assert set(tasks) == {"t1", "t3", "t4"}
    assert tasks["t1"].title == "Write final report"
    assert tasks["t1"].status == "In Progress"


@pytest.mark.asyncio
async def test_clear_tasks_keeps_columns_and_rules(tmp_path: Path) -> None:
    gateway = JsonFileGateway(tmp_path / "board.json")
    await gateway.replace_all_tasks_and_columns(make_board())
    await gateway.replace_all_rules((overdue_rule(),))

    await gateway.clear_tasks()

    snapshot = await gateway.export_all()
    assert snapshot.tasks == ()
    assert len(snapshot.columns) == 4
    assert len(snapshot.rules) == 1


@pytest.mark.asyncio
async def test_import_replaces_everything(tmp_path: Path) -> None:
    gateway = JsonFileGateway(tmp_path / "board.json")
    await gateway.replace_all_tasks_and_columns(make_board())
    replacement = Snapshot.from_board(make_board()[:1], (overdue_rule(),))

    await gateway.import_all(replacement)

    assert await gateway.export_all() == replacement


@pytest.mark.asyncio
async def test_corrupt_file_raises_persistence_error(tmp_path: Path) -> None:
    path = tmp_path / "board.json"
    path.write_text("{not json", encoding="utf-8")
    gateway = JsonFileGateway(path)

    with pytest.raises(PersistenceError) as excinfo:
        await gateway.load_all()

    assert excinfo.value.operation == "load_all"
    assert "Invalid JSON" in excinfo.value.reason


@pytest.mark.asyncio
async def test_wrong_shape_raises_persistence_error(tmp_path: Path) -> None:
    path = tmp_path / "board.json"
    path.write_text(json.dumps({"tasks": []}), encoding="utf-8")
    gateway = JsonFileGateway(path)

    with pytest.raises(PersistenceError, match="replace_all_rules failed"):
        await gateway.replace_all_rules(())


# =============================================================================
# JsonStorage
# =============================================================================


def test_storage_missing_file(tmp_path: Path) -> None:
    result = JsonStorage().load_json(tmp_path / "absent.json")

    assert isinstance(result, Err)
    assert "File not found" in result.error


def test_storage_save_creates_parents_and_leaves_no_temp_file(tmp_path: Path) -> None:
    storage = JsonStorage()
    path = tmp_path / "nested" / "doc.json"

    assert isinstance(storage.save_json(path, {"a": [1, 2]}), Ok)

    assert storage.load_json(path) == Ok({"a": [1, 2]})
    assert [p.name for p in path.parent.iterdir()] == ["doc.json"]


def test_storage_rejects_unserializable_data(tmp_path: Path) -> None:
    path = tmp_path / "doc.json"
    storage = JsonStorage()
    storage.save_json(path, {"kept": True})

    result = storage.save_json(path, {"bad": object()})

    assert isinstance(result, Err)
    assert "not JSON serializable" in result.error
    assert storage.load_json(path) == Ok({"kept": True})
