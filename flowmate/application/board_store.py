"""Board state store.

The single owner of the column arrangement and the rule list. Every
mutation goes through the pure operations in ``flowmate.domain.board``;
on success the store swaps in the new tuple and tells its subscribers.
On refusal it returns the ``Err`` and leaves state untouched, without
notifying anyone.

Persistence and automation are subscribers (see ``autosave`` and
``automation``); the store itself does no I/O.
"""

import logging
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from flowmate.domain.automation.models import Rule
from flowmate.domain.automation.validation import validate_rule
from flowmate.domain.board import (
    DEFAULT_COLUMN_COLOR,
    BoardChanged,
    BoardError,
    ChangeKind,
    Columns,
    RuleNotFound,
    Task,
    TaskNotFound,
    ValidationFailed,
    add_column,
    add_task,
    check_invariants,
    clear_tasks,
    column_of_task,
    copy_task,
    delete_column,
    delete_task,
    move_task,
    update_column,
    update_task,
)
from flowmate.domain.shared.ids import Clock, utc_now
from flowmate.domain.shared.result import Err, Ok, Result

logger = logging.getLogger(__name__)

Listener = Callable[[BoardChanged], None]

# Fields a rule update may change; the id is fixed.
RULE_PATCH_FIELDS = frozenset({"name", "condition", "action", "enabled"})


class BoardStore:
    """Authoritative in-memory board state with change notifications.

    Example:
        store = BoardStore()
        store.subscribe(lambda event: print(event.kind))
        store.add_column("To Do")
    """

    def __init__(
        self,
        columns: Columns = (),
        rules: tuple[Rule, ...] = (),
        clock: Clock = utc_now,
    ) -> None:
        self._columns: Columns = tuple(columns)
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._clock = clock
        self._listeners: list[Listener] = []

    @property
    def columns(self) -> Columns:
        return self._columns

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: ChangeKind, operation: str) -> None:
        event = BoardChanged(kind=kind, operation=operation)
        for listener in list(self._listeners):
            listener(event)

    def _commit(
        self,
        result: Result[Columns, BoardError],
        operation: str,
        kind: ChangeKind = ChangeKind.COLUMNS,
    ) -> Result[Columns, BoardError]:
        if isinstance(result, Err):
            logger.info(f"{operation} refused: {result.error}")
            return result
        self._columns = result.value
        self._emit(kind, operation)
        return result

    # =========================================================================
    # Task mutations
    # =========================================================================

    def add_task(self, column_id: str, task: Task) -> Result[Columns, BoardError]:
        """Append a task to a column. An unknown column changes nothing."""
        return self._commit(add_task(self._columns, column_id, task), "add_task", ChangeKind.TASK_CREATED)

    def update_task(self, task: Task) -> Result[Columns, BoardError]:
        return self._commit(update_task(self._columns, task), "update_task")

    def delete_task(self, task_id: str) -> Result[Columns, BoardError]:
        return self._commit(delete_task(self._columns, task_id), "delete_task")

    def move_task(
        self,
        task_id: str,
        from_column_id: str,
        to_column_id: str,
        to_index: int,
    ) -> Result[Columns, BoardError]:
        return self._commit(
            move_task(self._columns, task_id, from_column_id, to_column_id, to_index),
            "move_task",
        )

    def duplicate_task(self, task: Task, target_column_id: str | None = None) -> Result[Columns, BoardError]:
        """Copy a task into ``target_column_id`` or next to the original.

        Goes through ``add_task``, so it is persisted like a new task.
        """
        if target_column_id is None:
            holder = column_of_task(self._columns, task.id)
            if holder is None:
                return Err(TaskNotFound(task.id))
            target_column_id = holder.id
        return self.add_task(target_column_id, copy_task(task, self._clock))

    def clear_tasks(self) -> Result[Columns, BoardError]:
        return self._commit(Ok(clear_tasks(self._columns)), "clear_tasks")

    # =========================================================================
    # Column mutations
    # =========================================================================

    def add_column(self, title: str, color: str = DEFAULT_COLUMN_COLOR) -> Result[Columns, BoardError]:
        return self._commit(add_column(self._columns, title, color), "add_column")

    def update_column(
        self,
        column_id: str,
        *,
        title: str | None = None,
        color: str | None = None,
    ) -> Result[Columns, BoardError]:
        return self._commit(update_column(self._columns, column_id, title=title, color=color), "update_column")

    def delete_column(self, column_id: str) -> Result[Columns, BoardError]:
        return self._commit(delete_column(self._columns, column_id), "delete_column")

    def replace_columns(self, columns: Columns, operation: str = "replace_columns") -> Result[Columns, BoardError]:
        """Swap in a whole arrangement, e.g. an automation batch.

        Arrangements that break the board invariants are refused.
        """
        problems = check_invariants(columns)
        if problems:
            return self._commit(Err(ValidationFailed(tuple(problems))), operation)
        return self._commit(Ok(tuple(columns)), operation)

    # =========================================================================
    # Rules
    # =========================================================================

    def add_rule(self, rule: Rule) -> Result[tuple[Rule, ...], BoardError]:
        """Append a rule. Its target column must exist."""
        checked = validate_rule(rule, self._columns)
        if isinstance(checked, Err):
            logger.info(f"add_rule refused: {checked.error}")
            return checked
        self._rules = self._rules + (rule,)
        self._emit(ChangeKind.RULES, "add_rule")
        return Ok(self._rules)

    def update_rule(self, rule_id: str, **patch: Any) -> Result[tuple[Rule, ...], BoardError]:
        """Merge ``patch`` (name, condition, action, enabled) into a rule.

        The merged rule is validated like a freshly loaded one, so wire-shaped
        dicts for ``condition`` or ``action`` are accepted and malformed ones
        refused.
        """
        index = next((i for i, r in enumerate(self._rules) if r.id == rule_id), None)
        if index is None:
            return Err(RuleNotFound(rule_id))

        unknown = sorted(set(patch) - RULE_PATCH_FIELDS)
        if unknown:
            return Err(ValidationFailed((f"Unknown rule field(s): {', '.join(unknown)}",)))
        try:
            updated = Rule.model_validate({**self._rules[index].model_dump(), **patch})
        except ValidationError as e:
            logger.info(f"update_rule refused: {e.error_count()} invalid field(s)")
            problems = tuple(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            return Err(ValidationFailed(problems))
        checked = validate_rule(updated)
        if isinstance(checked, Err):
            logger.info(f"update_rule refused: {checked.error}")
            return checked
        self._rules = self._rules[:index] + (updated,) + self._rules[index + 1:]
        self._emit(ChangeKind.RULES, "update_rule")
        return Ok(self._rules)

    def delete_rule(self, rule_id: str) -> Result[tuple[Rule, ...], BoardError]:
        if not any(r.id == rule_id for r in self._rules):
            return Err(RuleNotFound(rule_id))
        self._rules = tuple(r for r in self._rules if r.id != rule_id)
        self._emit(ChangeKind.RULES, "delete_rule")
        return Ok(self._rules)

    # =========================================================================
    # Loading
    # =========================================================================

    def load(self, columns: Columns, rules: tuple[Rule, ...]) -> None:
        """Replace everything with state read from storage.

        Subscribers see a ``LOADED`` change, which autosave ignores.
        """
        self._columns = tuple(columns)
        self._rules = tuple(rules)
        self._emit(ChangeKind.LOADED, "load")
