"""Mock authentication: any well-formed email and password signs in."""

import base64
import re
from datetime import UTC, datetime, timedelta
from urllib.parse import quote

import structlog
from ulid import ULID

from ..db import SessionStore
from ..models import AuthSession, User
from ..validation import validate_credentials

log = structlog.get_logger()

_SEPARATORS = re.compile(r"[._-]")
_WORD_START = re.compile(r"\b\w")


def display_name(email: str) -> str:
    """"jane.doe@example.com" -> "Jane Doe"."""
    local = email.split("@")[0]
    return _WORD_START.sub(lambda m: m.group().upper(), _SEPARATORS.sub(" ", local))


def build_user(email: str, now: datetime | None = None) -> User:
    local = email.split("@")[0]
    return User(
        id=str(ULID()),
        email=email,
        name=display_name(email),
        avatar=(
            f"https://ui-avatars.com/api/?name={quote(local)}"
            "&background=3b82f6&color=fff&size=128"
        ),
        created_at=now or datetime.now(UTC),
    )


def issue_token(user_id: str, now: datetime | None = None) -> str:
    """Opaque, not signed: base64 of "<user id>:<epoch millis>"."""
    now = now or datetime.now(UTC)
    raw = f"{user_id}:{int(now.timestamp() * 1000)}"
    return base64.b64encode(raw.encode()).decode()


class AuthService:
    def __init__(self, sessions: SessionStore, session_ttl_days: int = 7) -> None:
        self._sessions = sessions
        self._ttl = timedelta(days=session_ttl_days)

    def current_session(self, now: datetime | None = None) -> AuthSession | None:
        return self._sessions.load(now)

    def login(
        self, email: str, password: str, now: datetime | None = None
    ) -> AuthSession | None:
        """Start a session, or return None when the credentials are malformed."""
        result = validate_credentials(email, password)
        if not result.is_valid:
            log.info("login_rejected", reason=result.first_message)
            return None

        now = now or datetime.now(UTC)
        user = build_user(email, now)
        session = AuthSession(
            user=user,
            token=issue_token(user.id, now),
            expires_at=now + self._ttl,
        )
        if not self._sessions.save(session):
            log.error("session_save_failed", user_id=user.id)
            return None
        log.info("login_succeeded", user_id=user.id)
        return session

    def logout(self) -> None:
        self._sessions.clear()
