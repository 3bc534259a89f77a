"""Task collection stored as a single document."""

from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError

from ..models import Priority, Task, TaskStats, TaskStatus
from .client import KeyValueStore, StorageKey

log = structlog.get_logger()


class TaskStore:
    """CRUD and queries over the task collection.

    Every call reloads the whole collection and every mutation writes the
    whole collection back. Callers only see this interface, so an indexed
    backend can replace it without changes elsewhere.
    """

    def __init__(self, kv: KeyValueStore, key: str = StorageKey.TASKS.value) -> None:
        self._kv = kv
        self._key = key

    def _load(self) -> list[Task]:
        raw = self._kv.get(self._key, [])
        if not isinstance(raw, list):
            log.warning("task_collection_malformed", key=self._key)
            return []
        tasks: list[Task] = []
        for item in raw:
            try:
                tasks.append(Task.model_validate(item))
            except ValidationError as exc:
                log.warning("task_record_skipped", error=str(exc))
        return tasks

    def _save(self, tasks: list[Task]) -> bool:
        return self._kv.set(self._key, [t.model_dump(mode="json") for t in tasks])

    def get_all(self) -> list[Task]:
        return self._load()

    def get_by_id(self, task_id: str) -> Task | None:
        for task in self._load():
            if task.id == task_id:
                return task
        return None

    def add(self, task: Task) -> bool:
        tasks = self._load()
        tasks.append(task)
        ok = self._save(tasks)
        log.debug("task_added", task_id=task.id, saved=ok)
        return ok

    def update(self, task_id: str, fields: dict[str, Any]) -> bool:
        """Merge ``fields`` into the task and refresh ``updated_at``.

        ``id`` and ``created_at`` are never overwritten.
        """
        tasks = self._load()
        for index, task in enumerate(tasks):
            if task.id != task_id:
                continue
            merged = task.model_dump()
            merged.update(
                {k: v for k, v in fields.items() if k not in ("id", "created_at")}
            )
            now = datetime.now(UTC)
            merged["updated_at"] = max(now, task.updated_at)
            try:
                tasks[index] = Task.model_validate(merged)
            except ValidationError as exc:
                log.warning("task_update_rejected", task_id=task_id, error=str(exc))
                return False
            return self._save(tasks)
        return False

    def delete(self, task_id: str) -> bool:
        tasks = self._load()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        return self._save(remaining)

    def get_by_status(self, status: TaskStatus) -> list[Task]:
        return [t for t in self._load() if t.status == status]

    def get_by_priority(self, priority: Priority) -> list[Task]:
        return [t for t in self._load() if t.priority == priority]

    def search(self, query: str) -> list[Task]:
        """Case-insensitive substring match over title, description and tags."""
        needle = query.lower()
        return [
            t
            for t in self._load()
            if needle in t.title.lower()
            or needle in t.description.lower()
            or any(needle in tag.lower() for tag in t.tags)
        ]

    def get_stats(self, now: datetime | None = None) -> TaskStats:
        return compute_stats(self._load(), now)


def compute_stats(tasks: list[Task], now: datetime | None = None) -> TaskStats:
    """Counts by status plus overdue, evaluated against ``now``."""
    now = now or datetime.now(UTC)
    return TaskStats(
        total=len(tasks),
        todo=sum(1 for t in tasks if t.status == TaskStatus.TODO),
        in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
        overdue=sum(1 for t in tasks if t.is_overdue(now)),
    )
