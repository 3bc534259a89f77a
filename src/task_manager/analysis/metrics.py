"""Aggregations behind the dashboard, timeline, users and insights views."""

import math
from dataclasses import dataclass, field

from ..models import DirectoryUser, Priority, Task, TaskStatus


@dataclass(frozen=True)
class PriorityBreakdown:
    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.high + self.medium + self.low


@dataclass(frozen=True)
class UsersOverview:
    total_users: int
    total_tasks: int
    completed_tasks: int
    avg_tasks_per_user: int
    assigned: dict[str, int] = field(default_factory=dict)


def priority_breakdown(tasks: list[Task]) -> PriorityBreakdown:
    return PriorityBreakdown(
        high=sum(1 for t in tasks if t.priority == Priority.HIGH),
        medium=sum(1 for t in tasks if t.priority == Priority.MEDIUM),
        low=sum(1 for t in tasks if t.priority == Priority.LOW),
    )


def status_breakdown(tasks: list[Task]) -> dict[TaskStatus, int]:
    counts = {status: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status] += 1
    return counts


def round_half_up(value: float) -> int:
    """Round halves up, matching how the percentages have always been shown."""
    return int(math.floor(value + 0.5))


def percentage(count: int, total: int) -> int | None:
    """Rounded share of ``total``; None when there is nothing to divide by."""
    if total == 0:
        return None
    return round_half_up(count / total * 100)


def completion_rate(completed: int, total: int) -> int:
    """Rounded percentage of completed tasks; 0 for an empty collection."""
    return percentage(completed, total) or 0


def completion_trend(tasks: list[Task]) -> list[tuple[str, int]]:
    """Completed tasks per month of their last update, in first-seen order."""
    months: dict[str, int] = {}
    for task in tasks:
        if task.status != TaskStatus.COMPLETED:
            continue
        label = task.updated_at.strftime("%b %Y")
        months[label] = months.get(label, 0) + 1
    return list(months.items())


def users_overview(users: list[DirectoryUser], tasks: list[Task]) -> UsersOverview:
    assigned = {user.id: 0 for user in users}
    for task in tasks:
        for user_id in task.assignees:
            if user_id in assigned:
                assigned[user_id] += 1
    return UsersOverview(
        total_users=len(users),
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        avg_tasks_per_user=round_half_up(len(tasks) / len(users)) if users else 0,
        assigned=assigned,
    )
