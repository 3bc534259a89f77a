"""Team directory stored as a single document."""

from datetime import UTC, datetime
from typing import Any

import structlog
from pydantic import ValidationError
from ulid import ULID

from ..models import DirectoryUser
from .client import KeyValueStore, StorageKey

log = structlog.get_logger()

DEMO_USER = {
    "name": "Demo Manager",
    "email": "demo@example.com",
    "role": "Project Manager",
}


class DuplicateEmailError(ValueError):
    """A directory entry with the same email (ignoring case) already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


class UserDirectory:
    def __init__(self, kv: KeyValueStore, key: str = StorageKey.USERS.value) -> None:
        self._kv = kv
        self._key = key

    def _load(self) -> list[DirectoryUser]:
        raw = self._kv.get(self._key, [])
        if not isinstance(raw, list):
            return []
        users: list[DirectoryUser] = []
        for item in raw:
            try:
                users.append(DirectoryUser.model_validate(item))
            except ValidationError as exc:
                log.warning("user_record_skipped", error=str(exc))
        return users

    def _save(self, users: list[DirectoryUser]) -> bool:
        return self._kv.set(self._key, [u.model_dump(mode="json") for u in users])

    def get_all(self) -> list[DirectoryUser]:
        return self._load()

    def get_by_id(self, user_id: str) -> DirectoryUser | None:
        return next((u for u in self._load() if u.id == user_id), None)

    def get_by_email(self, email: str) -> DirectoryUser | None:
        wanted = email.strip().lower()
        return next((u for u in self._load() if u.email.lower() == wanted), None)

    def create(
        self, name: str, email: str, role: str, avatar: str | None = None
    ) -> DirectoryUser | None:
        """Add a directory entry; None when it could not be stored.

        Raises DuplicateEmailError when the email is already taken.
        """
        users = self._load()
        email = email.strip()
        if any(u.email.lower() == email.lower() for u in users):
            raise DuplicateEmailError(email)
        user = DirectoryUser(
            id=str(ULID()),
            name=name.strip(),
            email=email,
            role=role.strip(),
            avatar=avatar,
            joined_at=datetime.now(UTC),
        )
        users.append(user)
        if not self._save(users):
            log.error("directory_user_create_failed", user_id=user.id)
            return None
        log.info("directory_user_created", user_id=user.id)
        return user

    def update(self, user_id: str, fields: dict[str, Any]) -> DirectoryUser | None:
        users = self._load()
        for index, user in enumerate(users):
            if user.id != user_id:
                continue
            email = fields.get("email")
            if email and any(
                u.id != user_id and u.email.lower() == email.lower() for u in users
            ):
                raise DuplicateEmailError(email)
            merged = user.model_dump()
            merged.update({k: v for k, v in fields.items() if k not in ("id", "joined_at")})
            try:
                users[index] = DirectoryUser.model_validate(merged)
            except ValidationError as exc:
                log.warning("directory_user_update_rejected", user_id=user_id, error=str(exc))
                return None
            if not self._save(users):
                log.error("directory_user_update_failed", user_id=user_id)
                return None
            return users[index]
        return None

    def delete(self, user_id: str) -> bool:
        users = self._load()
        remaining = [u for u in users if u.id != user_id]
        if len(remaining) == len(users):
            return False
        return self._save(remaining)

    def ensure_seeded(self) -> None:
        """Create the demo manager when the directory is empty."""
        if not self._load():
            self.create(**DEMO_USER)
