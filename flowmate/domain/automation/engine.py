"""Rule evaluation and batch re-filing.

All functions in this module are pure apart from logging. The engine
works in two steps against one snapshot of the board:

1. ``plan_moves`` checks every (task, enabled rule) pair and collects a
   pending move for each match whose target column exists and is not
   already the task's column.
2. ``apply_moves`` applies the whole batch at once. Each task is taken
   from the snapshot, removed from its source and appended to the end of
   its destination, so no task is moved twice in one pass and no source
   lookup sees a half-applied state.

A settled board re-evaluates to zero moves: the "already there" check
in step 1 is the only idempotence mechanism. One pass can unsettle the
board for another rule, so ``settle_automation`` repeats passes until
nothing moves.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import assert_never

from flowmate.domain.automation.events import TaskAutoMoved
from flowmate.domain.automation.models import (
    Condition,
    CustomFieldCondition,
    DueDateCondition,
    MoveToColumnAction,
    Rule,
    SubtasksCompletedCondition,
)
from flowmate.domain.board.models import COMPLETED_STATUS, Column, Columns, Task
from flowmate.domain.board.operations import find_column
from flowmate.domain.shared.ids import parse_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PendingMove:
    """One task a rule wants to re-file."""

    task_id: str
    source_column_id: str
    target_column_id: str
    rule_id: str


@dataclass(frozen=True, slots=True)
class AutomationOutcome:
    """Result of one automation pass."""

    columns: Columns
    moved: tuple[TaskAutoMoved, ...] = field(default_factory=tuple)

    @property
    def changed(self) -> bool:
        return bool(self.moved)


# =============================================================================
# Condition evaluation
# =============================================================================


def parse_due_date(text: str | None) -> datetime | None:
    """Parse an ISO-8601 due date into an aware UTC datetime.

    Date-only values mean midnight UTC; naive datetimes are read as UTC.
    Returns None for empty or unparseable values.
    """
    moment = parse_timestamp(text)
    if moment is None and text:
        logger.debug(f"Ignoring unparseable due date: {text!r}")
    return moment


def is_overdue(task: Task, now: datetime, completed_status: str = COMPLETED_STATUS) -> bool:
    due = parse_due_date(task.due_date)
    return due is not None and due < now and task.status != completed_status


def all_subtasks_completed(task: Task) -> bool:
    return len(task.subtasks) > 0 and all(s.completed for s in task.subtasks)


def evaluate_condition(
    condition: Condition,
    task: Task,
    now: datetime,
    completed_status: str = COMPLETED_STATUS,
) -> bool:
    """Return True if ``task`` satisfies ``condition`` at time ``now``."""
    match condition:
        case DueDateCondition():
            return is_overdue(task, now, completed_status)
        case SubtasksCompletedCondition():
            return all_subtasks_completed(task)
        case CustomFieldCondition(operator=operator, field=name, value=expected):
            if not name:
                return False
            found = task.first_field(name)
            if found is None:
                return False
            if operator == "equals":
                return found.value == expected
            if operator == "not-equals":
                return found.value != expected
            return expected in found.value
        case _:
            assert_never(condition)


# =============================================================================
# Planning and applying
# =============================================================================


def plan_moves(
    columns: Columns,
    rules: tuple[Rule, ...] | list[Rule],
    now: datetime,
    completed_status: str = COMPLETED_STATUS,
) -> list[PendingMove]:
    """Collect every move the enabled rules ask for on this snapshot.

    Rules whose target column no longer exists are skipped.
    """
    enabled = [rule for rule in rules if rule.enabled]
    if not enabled:
        return []

    moves: list[PendingMove] = []
    for column in columns:
        for task in column.tasks:
            for rule in enabled:
                if not evaluate_condition(rule.condition, task, now, completed_status):
                    continue
                match rule.action:
                    case MoveToColumnAction(target_column_id=target_id):
                        target = find_column(columns, target_id)
                        if target is None:
                            logger.debug(f"Rule '{rule.name}' targets missing column {target_id}; skipped")
                            continue
                        if task.status == target.title:
                            continue
                        moves.append(
                            PendingMove(
                                task_id=task.id,
                                source_column_id=column.id,
                                target_column_id=target_id,
                                rule_id=rule.id,
                            )
                        )
    return moves


def responsible_rule_name(rules: tuple[Rule, ...] | list[Rule], target_column_id: str) -> str:
    """Name of the first enabled rule (in rule order) targeting the column."""
    for rule in rules:
        if rule.enabled and rule.action.target_column_id == target_column_id:
            return rule.name
    return ""


def apply_moves(
    columns: Columns,
    moves: list[PendingMove],
    rules: tuple[Rule, ...] | list[Rule] = (),
) -> AutomationOutcome:
    """Apply a batch of pending moves against one snapshot.

    When several rules want the same task in different columns, the last
    enqueued move wins and the conflict is logged.
    """
    final: dict[str, PendingMove] = {}
    for move in moves:
        previous = final.pop(move.task_id, None)
        if previous is not None and previous.target_column_id != move.target_column_id:
            logger.warning(
                f"Conflicting rules for task {move.task_id}: "
                f"{previous.rule_id} -> {previous.target_column_id}, "
                f"{move.rule_id} -> {move.target_column_id}; applying the last one"
            )
        final[move.task_id] = move

    resolved: list[tuple[PendingMove, Task, Column]] = []
    for move in final.values():
        source = find_column(columns, move.source_column_id)
        target = find_column(columns, move.target_column_id)
        if source is None or target is None or source.index_of(move.task_id) is None:
            logger.debug(f"Dropping stale move for task {move.task_id}")
            continue
        task = source.tasks[source.index_of(move.task_id)]
        resolved.append((move, task, target))

    if not resolved:
        return AutomationOutcome(columns=columns)

    leaving = {task.id for _, task, _ in resolved}
    placed: dict[str, list[Task]] = {
        column.id: [t for t in column.tasks if t.id not in leaving] for column in columns
    }
    moved: list[TaskAutoMoved] = []

    for move, task, target in resolved:
        placed[target.id].append(task.model_copy(update={"status": target.title}))
        moved.append(
            TaskAutoMoved(
                task_id=task.id,
                task_title=task.title,
                source_column_id=move.source_column_id,
                target_column_id=target.id,
                target_column_title=target.title,
                rule_name=responsible_rule_name(rules, target.id),
            )
        )

    updated = tuple(column.model_copy(update={"tasks": tuple(placed[column.id])}) for column in columns)
    return AutomationOutcome(columns=updated, moved=tuple(moved))


def run_automation(
    columns: Columns,
    rules: tuple[Rule, ...] | list[Rule],
    now: datetime,
    completed_status: str = COMPLETED_STATUS,
) -> AutomationOutcome:
    """Plan and apply one automation pass."""
    moves = plan_moves(columns, rules, now, completed_status)
    return apply_moves(columns, moves, rules)


def settle_automation(
    columns: Columns,
    rules: tuple[Rule, ...] | list[Rule],
    now: datetime,
    completed_status: str = COMPLETED_STATUS,
) -> AutomationOutcome:
    """Repeat passes until the board re-evaluates to zero moves.

    A pass's own output can satisfy another rule (an overdue task with a
    finished checklist goes to Blocked, then on to Completed), so each
    batch is evaluated again. Passes are capped at tasks x enabled rules;
    a rule set that keeps bouncing a task stops there with a warning.
    """
    enabled = sum(1 for rule in rules if rule.enabled)
    task_count = sum(len(column.tasks) for column in columns)
    max_passes = max(1, task_count * enabled)

    moved: list[TaskAutoMoved] = []
    current = columns
    for _ in range(max_passes):
        outcome = run_automation(current, rules, now, completed_status)
        if not outcome.changed:
            return AutomationOutcome(current, tuple(moved))
        current = outcome.columns
        moved.extend(outcome.moved)

    if plan_moves(current, rules, now, completed_status):
        logger.warning(f"Automation did not settle after {max_passes} pass(es); rules move tasks in a cycle")
    return AutomationOutcome(current, tuple(moved))
