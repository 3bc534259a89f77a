"""SQLite-backed key-value store holding one JSON document per key."""

import json
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any

import structlog

log = structlog.get_logger()


class StorageKey(str, Enum):
    """Keys of the documents the application keeps."""

    TASKS = "task_manager_tasks"
    USERS = "task_manager_users"
    AUTH_SESSION = "task_manager_auth"


class KeyValueStore:
    """Durable key-value store.

    Values are serialized to JSON. No method raises: failures are logged and
    reported as ``False`` or the caller's default. Every call opens its own
    connection and writes the whole document, so two processes sharing the
    file follow last-writer-wins.
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self.init_db()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection with WAL mode enabled."""
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextmanager
    def _db(self) -> Iterator[sqlite3.Connection]:
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> bool:
        """Create the schema if missing."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._db() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
            return True
        except (sqlite3.Error, OSError) as exc:
            log.error("storage_init_failed", db_path=str(self._db_path), error=str(exc))
            return False

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded document under ``key``, or ``default``."""
        try:
            with self._db() as conn:
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
            if row is None:
                return default
            return json.loads(row["value"])
        except (sqlite3.Error, OSError, ValueError) as exc:
            log.warning("storage_read_failed", key=key, error=str(exc))
            return default

    def set(self, key: str, value: Any) -> bool:
        """Store ``value`` under ``key``, replacing any previous document."""
        try:
            payload = json.dumps(value, ensure_ascii=False)
            with self._db() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value
                    """,
                    (key, payload),
                )
            return True
        except (sqlite3.Error, OSError, TypeError, ValueError) as exc:
            log.warning("storage_write_failed", key=key, error=str(exc))
            return False

    def remove(self, key: str) -> bool:
        try:
            with self._db() as conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            return True
        except (sqlite3.Error, OSError) as exc:
            log.warning("storage_remove_failed", key=key, error=str(exc))
            return False

    def clear(self) -> bool:
        try:
            with self._db() as conn:
                conn.execute("DELETE FROM kv_store")
            return True
        except (sqlite3.Error, OSError) as exc:
            log.warning("storage_clear_failed", error=str(exc))
            return False
