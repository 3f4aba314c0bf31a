# tests/test_operations.py

from flowmate.domain.board.editing import (
    add_custom_field,
    add_subtask,
    remove_custom_field,
    remove_subtask,
    set_custom_field_value,
    toggle_subtask,
    with_due_date,
)
from flowmate.domain.board.errors import (
    ColumnNotEmpty,
    ColumnNotFound,
    DuplicateColumnTitle,
    TaskNotFound,
    ValidationFailed,
)
from flowmate.domain.board.models import Task
from flowmate.domain.board.operations import (
    add_column,
    add_task,
    check_invariants,
    clear_tasks,
    copy_task,
    delete_column,
    delete_task,
    find_task,
    move_task,
    update_column,
    update_task,
)
from flowmate.domain.shared.result import Err, Ok

from .fakes import NOW, FixedClock, ids, make_task


def test_add_task_appends_and_stamps_status(board) -> None:
    result = add_task(board, "col-doing", Task(id="t9", title="New", status="whatever"))

    assert isinstance(result, Ok)
    doing = result.value[1]
    assert ids(doing) == ["t3", "t9"]
    assert doing.tasks[-1].status == "In Progress"
    assert check_invariants(result.value) == []
    # input snapshot untouched
    assert ids(board[1]) == ["t3"]


def test_add_task_to_unknown_column_is_refused(board) -> None:
    result = add_task(board, "col-missing", Task(title="New"))
    assert result == Err(ColumnNotFound("col-missing"))


def test_add_task_rejects_blank_title_and_duplicate_id(board) -> None:
    assert isinstance(add_task(board, "col-todo", Task(title="  ")).error, ValidationFailed)
    assert isinstance(add_task(board, "col-todo", make_task("t1", "To Do")), Err)


def test_update_task_replaces_in_place_and_keeps_created_at(board) -> None:
    original = board[0].tasks[0]
    edited = original.model_copy(update={"title": "Write final report", "created_at": "2030-01-01T00:00:00.000Z"})

    result = update_task(board, edited)

    assert isinstance(result, Ok)
    todo = result.value[0]
    assert ids(todo) == ["t1", "t2"]
    assert todo.tasks[0].title == "Write final report"
    assert todo.tasks[0].created_at == original.created_at


def test_update_task_with_new_status_relocates_it(board) -> None:
    moved = board[0].tasks[0].model_copy(update={"status": "Completed"})

    result = update_task(board, moved)

    assert isinstance(result, Ok)
    assert ids(result.value[0]) == ["t2"]
    assert ids(result.value[3]) == ["t1"]
    assert check_invariants(result.value) == []


def test_update_task_refuses_unknown_task_or_status(board) -> None:
    assert update_task(board, make_task("t99", "To Do")) == Err(TaskNotFound("t99"))
    assert isinstance(update_task(board, make_task("t1", "Archive")), Err)


def test_delete_task(board) -> None:
    result = delete_task(board, "t2")
    assert isinstance(result, Ok)
    assert find_task(result.value, "t2") is None
    assert delete_task(board, "t2x") == Err(TaskNotFound("t2x"))


def test_move_between_columns_inserts_at_index(board) -> None:
    # drop To Do[0] into In Progress at index 0
    result = move_task(board, "t1", "col-todo", "col-doing", 0)

    assert isinstance(result, Ok)
    assert ids(result.value[0]) == ["t2"]
    assert ids(result.value[1]) == ["t1", "t3"]
    assert result.value[1].tasks[0].status == "In Progress"


def test_move_clamps_index_past_the_end(board) -> None:
    result = move_task(board, "t1", "col-todo", "col-doing", 2)

    assert isinstance(result, Ok)
    assert ids(result.value[1]) == ["t3", "t1"]


def test_reorder_uses_splice_semantics(board) -> None:
    column = board[0].model_copy(
        update={"tasks": board[0].tasks + (make_task("t4", "To Do"),)}
    )
    three = (column,) + board[1:]

    result = move_task(three, "t1", "col-todo", "col-todo", 2)

    assert isinstance(result, Ok)
    assert ids(result.value[0]) == ["t2", "t4", "t1"]
    assert sorted(ids(result.value[0])) == sorted(ids(three[0]))


def test_move_refuses_unknown_column_or_task(board) -> None:
    assert move_task(board, "t1", "col-todo", "col-x", 0) == Err(ColumnNotFound("col-x"))
    assert move_task(board, "t3", "col-todo", "col-doing", 0) == Err(TaskNotFound("t3"))


def test_copy_task_gets_new_identity() -> None:
    clock = FixedClock()
    original = make_task("t1", "To Do", "Write report", subtasks=(True, False))

    copy = copy_task(original, clock)

    assert copy.id != original.id
    assert copy.title == "Write report (Copy)"
    assert copy.created_at == "2024-05-01T12:00:00.000Z"
    assert copy.subtasks == original.subtasks
    assert copy.status == original.status


def test_clear_tasks_keeps_columns(board) -> None:
    cleared = clear_tasks(board)
    assert [c.id for c in cleared] == [c.id for c in board]
    assert all(not c.tasks for c in cleared)


def test_add_column_refuses_blank_and_duplicate_titles(board) -> None:
    result = add_column(board, "  Review ")
    assert isinstance(result, Ok)
    assert result.value[-1].title == "Review"
    assert result.value[-1].tasks == ()

    assert isinstance(add_column(board, "   ").error, ValidationFailed)
    assert add_column(board, "Blocked") == Err(DuplicateColumnTitle("Blocked"))


def test_rename_column_restamps_its_tasks(board) -> None:
    result = update_column(board, "col-todo", title="Backlog")

    assert isinstance(result, Ok)
    backlog = result.value[0]
    assert backlog.title == "Backlog"
    assert {t.status for t in backlog.tasks} == {"Backlog"}
    assert check_invariants(result.value) == []


def test_update_column_color_only(board) -> None:
    result = update_column(board, "col-done", color="bg-green-50")
    assert isinstance(result, Ok)
    assert result.value[3].color == "bg-green-50"
    assert result.value[3].title == "Completed"


def test_rename_to_existing_title_is_refused(board) -> None:
    assert update_column(board, "col-todo", title="Blocked") == Err(DuplicateColumnTitle("Blocked"))


def test_delete_non_empty_column_is_refused(board) -> None:
    result = delete_column(board, "col-todo")
    assert result == Err(ColumnNotEmpty("col-todo", 2))
    assert "Move all tasks" in result.error.message


def test_delete_empty_column(board) -> None:
    result = delete_column(board, "col-blocked")
    assert isinstance(result, Ok)
    assert [c.id for c in result.value] == ["col-todo", "col-doing", "col-done"]


def test_check_invariants_reports_status_mismatch(board) -> None:
    broken = (board[0].model_copy(update={"tasks": (make_task("t1", "Completed"),)}),) + board[1:]
    problems = check_invariants(broken)
    assert len(problems) == 1
    assert "t1" in problems[0]


# =============================================================================
# Editing helpers
# =============================================================================


def test_toggle_subtask() -> None:
    task = make_task("t1", "To Do", subtasks=(False, True))
    toggled = toggle_subtask(task, "t1-s0")
    assert [s.completed for s in toggled.subtasks] == [True, True]
    assert [s.completed for s in task.subtasks] == [False, True]


def test_add_and_remove_subtask() -> None:
    task = make_task("t1", "To Do")
    assert isinstance(add_subtask(task, " "), Err)

    added = add_subtask(task, "Draft outline")
    assert isinstance(added, Ok)
    subtask = added.value.subtasks[0]
    assert subtask.title == "Draft outline"
    assert subtask.completed is False
    assert remove_subtask(added.value, subtask.id).subtasks == ()


def test_custom_field_helpers() -> None:
    task = make_task("t1", "To Do")
    assert isinstance(add_custom_field(task, ""), Err)

    added = add_custom_field(task, "Priority", "Low")
    assert isinstance(added, Ok)
    field_id = added.value.custom_fields[0].id

    updated = set_custom_field_value(added.value, field_id, "High")
    assert updated.first_field("Priority").value == "High"
    assert remove_custom_field(updated, field_id).custom_fields == ()


def test_with_due_date() -> None:
    task = make_task("t1", "To Do")
    assert with_due_date(task, NOW).due_date == "2024-05-01T12:00:00.000Z"
    assert with_due_date(task, None).due_date is None
