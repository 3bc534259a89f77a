"""Task workflows used by the HTML pages and the console."""

from datetime import date

import structlog

from ..analysis.classifier import suggest
from ..db import TaskStore
from ..models import AISuggestions, Task, TaskCreate, TaskStatus, TaskUpdate, build_task
from ..validation import (
    ValidationResult,
    validate_task,
    validate_task_description,
    validate_task_title,
)

log = structlog.get_logger()

REQUIRED_FIELDS = ("title", "description", "priority", "status", "tags", "assignees")


def validate_update(data: TaskUpdate) -> ValidationResult:
    """Check only the text fields the update actually carries."""
    result = ValidationResult()
    if data.title is not None:
        result = result.merge(validate_task_title(data.title))
    if data.description is not None:
        result = result.merge(validate_task_description(data.description))
    return result


class TaskService:
    """Validate, then persist through the task store.

    Failures are logged and reported as None/False.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store

    def create(self, data: TaskCreate) -> Task | None:
        result = validate_task(data.title, data.description)
        if not result.is_valid:
            log.info("task_create_rejected", errors=result.by_field())
            return None
        task = build_task(data)
        if not self._store.add(task):
            log.error("task_create_failed", task_id=task.id)
            return None
        log.info("task_created", task_id=task.id)
        return task

    def update(self, task_id: str, data: TaskUpdate) -> bool:
        result = validate_update(data)
        if not result.is_valid:
            log.info("task_update_rejected", task_id=task_id, errors=result.by_field())
            return False
        fields = data.model_dump(exclude_unset=True)
        # Only due_date, estimated_time and ai_suggestions may be cleared.
        for key in REQUIRED_FIELDS:
            if key in fields and fields[key] is None:
                del fields[key]
        for key in ("title", "description"):
            if key in fields:
                fields[key] = fields[key].strip()
        if not self._store.update(task_id, fields):
            log.info("task_update_failed", task_id=task_id)
            return False
        return True

    def set_status(self, task_id: str, status: TaskStatus) -> bool:
        return self._store.update(task_id, {"status": status})

    def delete(self, task_id: str) -> bool:
        ok = self._store.delete(task_id)
        log.info("task_deleted" if ok else "task_delete_missed", task_id=task_id)
        return ok

    def suggest(self, task_id: str, today: date | None = None) -> AISuggestions | None:
        """Attach fresh suggestions; the task's own priority and tags stay as they are."""
        task = self._store.get_by_id(task_id)
        if task is None:
            return None
        suggestions = suggest(task.title, task.description, today)
        if not self._store.update(task_id, {"ai_suggestions": suggestions}):
            return None
        return suggestions

    def find(self, query: str) -> list[Task]:
        """Exact id, then id suffix, then case-insensitive partial title."""
        task = self._store.get_by_id(query)
        if task is not None:
            return [task]
        tasks = self._store.get_all()
        return [t for t in tasks if t.id.endswith(query)] or [
            t for t in tasks if query.lower() in t.title.lower()
        ]
