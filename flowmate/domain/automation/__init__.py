"""Automation domain - rules that re-file tasks between columns.

Key Types:
    Rule - named condition/action pair
    DueDateCondition, SubtasksCompletedCondition, CustomFieldCondition
    MoveToColumnAction

Engine Functions:
    evaluate_condition - does one task satisfy one condition
    plan_moves - collect pending moves against one snapshot
    apply_moves - apply a batch of moves at once
    run_automation - plan + apply
    settle_automation - repeat passes until nothing moves

Domain Events:
    TaskAutoMoved - a rule moved a task
"""

from .engine import (
    AutomationOutcome,
    PendingMove,
    all_subtasks_completed,
    apply_moves,
    evaluate_condition,
    is_overdue,
    parse_due_date,
    plan_moves,
    responsible_rule_name,
    run_automation,
    settle_automation,
)
from .events import TaskAutoMoved
from .models import (
    Action,
    Condition,
    CustomFieldCondition,
    DueDateCondition,
    MoveToColumnAction,
    Rule,
    SubtasksCompletedCondition,
)
from .validation import is_valid_rule, validate_rule

__all__ = [
    # Models
    "Rule",
    "Condition",
    "DueDateCondition",
    "SubtasksCompletedCondition",
    "CustomFieldCondition",
    "Action",
    "MoveToColumnAction",
    # Validation
    "validate_rule",
    "is_valid_rule",
    # Engine
    "PendingMove",
    "AutomationOutcome",
    "parse_due_date",
    "is_overdue",
    "all_subtasks_completed",
    "evaluate_condition",
    "plan_moves",
    "apply_moves",
    "responsible_rule_name",
    "run_automation",
    "settle_automation",
    # Events
    "TaskAutoMoved",
]
