"""Default board content for a first start.

Seeding happens only when storage reports zero columns. Dates are
relative to the clock passed in, so the sample board always has some
overdue and some upcoming work.
"""

from datetime import timedelta

from flowmate.domain.automation.models import (
    DueDateCondition,
    MoveToColumnAction,
    Rule,
    SubtasksCompletedCondition,
)
from flowmate.domain.board.models import Column, Columns, CustomField, Subtask, Task
from flowmate.domain.shared.ids import Clock, isoformat, utc_now

# (id, title, color)
DEFAULT_COLUMNS: tuple[tuple[str, str, str], ...] = (
    ("column-1", "To Do", "bg-blue-50 dark:bg-blue-900/30"),
    ("column-2", "In Progress", "bg-yellow-50 dark:bg-yellow-900/30"),
    ("column-3", "Blocked", "bg-red-50 dark:bg-red-900/30"),
    ("column-4", "Completed", "bg-green-50 dark:bg-green-900/30"),
)

# status -> [(title, description, due in days, created days ago, subtasks, fields)]
_SAMPLE_TASKS: dict[str, list[tuple]] = {
    "To Do": [
        (
            "Research competitor products",
            "Analyze top 5 competitor products and create a comparison report",
            5, 2,
            [("Identify top competitors", False), ("Create comparison criteria", False),
             ("Gather product information", False)],
            [("Priority", "High"), ("Estimated Hours", "8")],
        ),
        (
            "Design new landing page",
            "Create wireframes and mockups for the new product landing page",
            7, 1,
            [("Research design trends", False), ("Create wireframes", False)],
            [("Priority", "Medium"), ("Assigned To", "Sarah")],
        ),
        (
            "Update documentation",
            "Update the user documentation with the latest features",
            3, 3,
            [],
            [("Priority", "Low")],
        ),
    ],
    "In Progress": [
        (
            "Implement authentication flow",
            "Create login, registration, and password reset functionality",
            2, 5,
            [("Design authentication screens", True), ("Implement login functionality", True),
             ("Implement registration", False), ("Implement password reset", False)],
            [("Priority", "High"), ("Assigned To", "Michael"), ("Story Points", "8")],
        ),
        (
            "Optimize database queries",
            "Improve performance of slow database queries on the dashboard",
            1, 4,
            [("Identify slow queries", True), ("Add indexes", False), ("Rewrite complex queries", False)],
            [("Priority", "High"), ("Estimated Hours", "6")],
        ),
    ],
    "Blocked": [
        (
            "Fix payment integration",
            "Resolve issues with the Stripe payment integration",
            -1, 7,
            [("Investigate error logs", True), ("Contact Stripe support", True),
             ("Update API integration", False)],
            [("Priority", "Critical"), ("Blocker", "Waiting for API documentation")],
        ),
        (
            "Finalize third-party integrations",
            "Complete integration with analytics and marketing tools",
            -2, 6,
            [("Set up Google Analytics", True), ("Integrate Mailchimp", False)],
            [("Priority", "Medium"), ("Blocker", "Waiting for API keys")],
        ),
    ],
    "Completed": [
        (
            "Create project proposal",
            "Draft and finalize the project proposal document",
            -5, 10,
            [("Research market needs", True), ("Define project scope", True),
             ("Create budget estimate", True)],
            [("Priority", "High"), ("Completed On", None)],
        ),
        (
            "Set up development environment",
            "Configure development, staging, and production environments",
            -8, 12,
            [("Set up local environment", True), ("Configure staging server", True),
             ("Set up CI/CD pipeline", True)],
            [("Priority", "Medium"), ("Completed By", "David")],
        ),
        (
            "Initial user research",
            "Conduct interviews and surveys with potential users",
            -15, 20,
            [("Create research questions", True), ("Recruit participants", True),
             ("Analyze results", True)],
            [("Priority", "High"), ("Participants", "12")],
        ),
    ],
}


def sample_tasks(status: str, clock: Clock = utc_now) -> tuple[Task, ...]:
    """Build the sample tasks for one default column."""
    now = clock()
    # stands in for the "Completed On" placeholder
    completed_on = (now - timedelta(days=6)).date().isoformat()
    tasks = []
    for title, description, due_in, created_ago, subtasks, fields in _SAMPLE_TASKS.get(status, []):
        tasks.append(
            Task(
                title=title,
                description=description,
                status=status,
                due_date=isoformat(now + timedelta(days=due_in)),
                subtasks=tuple(Subtask(title=t, completed=done) for t, done in subtasks),
                custom_fields=tuple(
                    CustomField(name=name, value=completed_on if value is None else value)
                    for name, value in fields
                ),
                created_at=isoformat(now - timedelta(days=created_ago)),
            )
        )
    return tuple(tasks)


def default_columns(clock: Clock = utc_now) -> Columns:
    """The four default columns, filled with sample tasks."""
    return tuple(
        Column(id=column_id, title=title, color=color, tasks=sample_tasks(title, clock))
        for column_id, title, color in DEFAULT_COLUMNS
    )


def default_rules() -> tuple[Rule, ...]:
    """Overdue work goes to Blocked; finished checklists go to Completed."""
    return (
        Rule(
            name="Move overdue tasks to Blocked",
            condition=DueDateCondition(),
            action=MoveToColumnAction(target_column_id="column-3"),
        ),
        Rule(
            name="Move completed tasks when all subtasks done",
            condition=SubtasksCompletedCondition(),
            action=MoveToColumnAction(target_column_id="column-4"),
        ),
    )
