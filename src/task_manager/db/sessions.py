"""Login session document."""

from datetime import UTC, datetime

import structlog
from pydantic import ValidationError

from ..models import AuthSession
from .client import KeyValueStore, StorageKey

log = structlog.get_logger()


class SessionStore:
    def __init__(
        self, kv: KeyValueStore, key: str = StorageKey.AUTH_SESSION.value
    ) -> None:
        self._kv = kv
        self._key = key

    def load(self, now: datetime | None = None) -> AuthSession | None:
        """Return the active session; an expired or unreadable one is removed."""
        raw = self._kv.get(self._key)
        if raw is None:
            return None
        try:
            session = AuthSession.model_validate(raw)
        except ValidationError as exc:
            log.warning("session_unreadable", error=str(exc))
            self._kv.remove(self._key)
            return None
        if session.is_expired(now or datetime.now(UTC)):
            log.info("session_expired", user_id=session.user.id)
            self._kv.remove(self._key)
            return None
        return session

    def save(self, session: AuthSession) -> bool:
        return self._kv.set(self._key, session.model_dump(mode="json"))

    def clear(self) -> bool:
        return self._kv.remove(self._key)
