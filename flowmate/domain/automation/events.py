"""Automation domain events."""

from dataclasses import dataclass

from flowmate.domain.shared.events import DomainEvent


@dataclass(frozen=True)
class TaskAutoMoved(DomainEvent):
    """Event raised when a rule re-files a task into another column.

    Carries everything a user-facing notification needs: the task title,
    the destination column title and the name of the responsible rule.
    """

    task_id: str = ""
    task_title: str = ""
    source_column_id: str = ""
    target_column_id: str = ""
    target_column_title: str = ""
    rule_name: str = ""

    @property
    def description(self) -> str:
        return f'"{self.task_title}" moved to {self.target_column_title} by rule: {self.rule_name}'
