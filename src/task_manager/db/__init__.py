"""Database package."""

from .client import KeyValueStore, StorageKey
from .sessions import SessionStore
from .tasks import TaskStore, compute_stats
from .users import DEMO_USER, DuplicateEmailError, UserDirectory

__all__ = [
    "DEMO_USER",
    "DuplicateEmailError",
    "KeyValueStore",
    "SessionStore",
    "StorageKey",
    "TaskStore",
    "UserDirectory",
    "compute_stats",
]
