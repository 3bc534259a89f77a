"""Application state built once at startup and passed to whoever needs it."""

from dataclasses import dataclass

from .config import Settings
from .db import KeyValueStore, SessionStore, TaskStore, UserDirectory
from .services import AuthService, TaskService


@dataclass
class AppState:
    settings: Settings
    kv: KeyValueStore
    tasks: TaskStore
    users: UserDirectory
    sessions: SessionStore
    task_service: TaskService
    auth: AuthService

    @classmethod
    def create(cls, settings: Settings) -> "AppState":
        kv = KeyValueStore(settings.db_path)
        tasks = TaskStore(kv)
        sessions = SessionStore(kv)
        return cls(
            settings=settings,
            kv=kv,
            tasks=tasks,
            users=UserDirectory(kv),
            sessions=sessions,
            task_service=TaskService(tasks),
            auth=AuthService(sessions, settings.session_ttl_days),
        )
