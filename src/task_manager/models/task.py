"""Pydantic models for tasks."""

from datetime import UTC, date, datetime, time
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from ulid import ULID


class TaskStatus(str, Enum):
    """Task status enumeration."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


STATUS_LABELS = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}
STATUS_ICONS = {
    TaskStatus.TODO: "📝",
    TaskStatus.IN_PROGRESS: "🔄",
    TaskStatus.COMPLETED: "✅",
}
PRIORITY_LABELS = {
    Priority.HIGH: "High Priority",
    Priority.MEDIUM: "Medium Priority",
    Priority.LOW: "Low Priority",
}


def _unique(values: list[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


class AISuggestions(BaseModel):
    """Advisory output of the classification engine."""

    suggested_priority: Priority
    estimated_time: str
    tags: list[str] = Field(default_factory=list, max_length=3)
    deadline: date | None = None
    reasoning: str = ""


class Task(BaseModel):
    """A stored task."""

    id: str
    title: str
    description: str
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_time: str | None = None
    ai_suggestions: AISuggestions | None = None
    assignees: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    def is_overdue(self, now: datetime) -> bool:
        """Past UTC midnight of the due date and the task is not completed."""
        if self.due_date is None or self.status == TaskStatus.COMPLETED:
            return False
        return datetime.combine(self.due_date, time.min, UTC) < now


class TaskCreate(BaseModel):
    """Request model for creating a task.

    Title and description default to "" so the validation rules, not the
    schema, decide what is missing.
    """

    title: str = ""
    description: str = ""
    priority: Priority | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_time: str | None = None
    ai_suggestions: AISuggestions | None = None
    assignees: list[str] = Field(default_factory=list)

    @field_validator("tags", "assignees")
    @classmethod
    def _dedupe(cls, values: list[str]) -> list[str]:
        return _unique(values)


class TaskUpdate(BaseModel):
    """Request model for a partial task update."""

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    tags: list[str] | None = None
    estimated_time: str | None = None
    ai_suggestions: AISuggestions | None = None
    assignees: list[str] | None = None

    @field_validator("tags", "assignees")
    @classmethod
    def _dedupe(cls, values: list[str] | None) -> list[str] | None:
        return None if values is None else _unique(values)


class TaskStats(BaseModel):
    """Derived counts, computed at read time."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0


def build_task(data: TaskCreate, now: datetime | None = None) -> Task:
    """Construct a new Task with a fresh id and matching timestamps."""
    now = now or datetime.now(UTC)
    return Task(
        id=str(ULID()),
        title=data.title.strip(),
        description=data.description.strip(),
        priority=data.priority or Priority.MEDIUM,
        status=data.status or TaskStatus.TODO,
        due_date=data.due_date,
        tags=list(data.tags),
        estimated_time=data.estimated_time or None,
        ai_suggestions=data.ai_suggestions,
        assignees=list(data.assignees),
        created_at=now,
        updated_at=now,
    )
