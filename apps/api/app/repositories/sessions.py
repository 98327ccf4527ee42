"""In-memory session repository keyed by token."""
from __future__ import annotations

import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from secrets import token_urlsafe
from typing import Callable, Dict

from ..core.exceptions import (
    SessionConflictError,
    SessionExpiredError,
    SessionNotFoundError,
    TokenCollisionError,
    TokenGenerationError,
)
from ..models.session import Session, SessionStatus

Clock = Callable[[], datetime]

DEFAULT_TOKEN_BYTES = 9


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemorySessionRepository:
    """Thread-safe token -> session map.

    Sessions are copied on the way in and on the way out, so callers only ever
    hold snapshots. A single lock guards the whole map.
    """

    def __init__(self, clock: Clock = utcnow, token_bytes: int = DEFAULT_TOKEN_BYTES) -> None:
        self._clock = clock
        self._token_bytes = token_bytes
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def now(self) -> datetime:
        return self._clock()

    def create_session(self, ttl: timedelta) -> Session:
        """Insert a fresh pending session and return a copy of it."""

        token = self._generate_token()
        now = self._clock()
        session = Session(
            token=token,
            created_at=now,
            expires_at=now + ttl,
            status=SessionStatus.PENDING,
        )

        with self._lock:
            if token in self._sessions:
                raise TokenCollisionError()
            self._sessions[token] = session
            return replace(session)

    def get_session(self, token: str) -> Session:
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise SessionNotFoundError()
            return replace(session)

    def update_session(self, session: Session) -> None:
        """Replace the stored copy of an existing session.

        The caller's snapshot must carry the revision currently stored;
        otherwise another writer got there first and ``SessionConflictError``
        is raised. A session past its expiry rejects writes with
        ``SessionExpiredError`` even before the sweep removes it. Never inserts.
        """

        now = self._clock()
        with self._lock:
            current = self._sessions.get(session.token)
            if current is None:
                raise SessionNotFoundError()
            if current.is_expired(now):
                raise SessionExpiredError()
            if current.revision != session.revision:
                raise SessionConflictError()
            self._sessions[session.token] = replace(session, revision=session.revision + 1)

    def delete_session(self, token: str) -> None:
        with self._lock:
            self._sessions.pop(token, None)

    def cleanup_expired_sessions(self) -> int:
        """Remove every session whose expiry has passed and return how many went."""

        now = self._clock()
        with self._lock:
            expired = [token for token, session in self._sessions.items() if session.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def active_session_count(self) -> int:
        now = self._clock()
        with self._lock:
            return sum(1 for session in self._sessions.values() if session.is_active(now))

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _generate_token(self) -> str:
        try:
            return token_urlsafe(self._token_bytes)
        except (OSError, NotImplementedError) as exc:
            raise TokenGenerationError(f"failed to generate token: {exc}") from exc
