"""Validation predicate for automation rules."""

from collections.abc import Iterable

from flowmate.domain.automation.models import CustomFieldCondition, MoveToColumnAction, Rule
from flowmate.domain.board.errors import ValidationFailed
from flowmate.domain.board.models import Column
from flowmate.domain.board.validation import is_blank
from flowmate.domain.shared.result import Err, Ok, Result, is_ok


def validate_rule(rule: Rule, columns: Iterable[Column] | None = None) -> Result[Rule, ValidationFailed]:
    """Check a rule's name and, if columns are given, that its target exists.

    A rule whose target column was deleted is still a well-formed rule;
    callers that only need structure should omit ``columns``.
    """
    problems: list[str] = []
    if is_blank(rule.id):
        problems.append("Rule id is required")
    if is_blank(rule.name):
        problems.append("Rule name must not be empty")

    match rule.condition:
        case CustomFieldCondition(field=name) if is_blank(name):
            problems.append("Custom field condition needs a field name")

    match rule.action:
        case MoveToColumnAction(target_column_id=target):
            if is_blank(target):
                problems.append("Rule target column is required")
            elif columns is not None and target not in {c.id for c in columns}:
                problems.append(f"Rule target column '{target}' does not exist")

    if problems:
        return Err(ValidationFailed(tuple(problems)))
    return Ok(rule)


def is_valid_rule(rule: Rule, columns: Iterable[Column] | None = None) -> bool:
    return is_ok(validate_rule(rule, columns))
