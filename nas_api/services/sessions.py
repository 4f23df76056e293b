"""Session store: opaque bearer tokens mapped to user ids with a fixed TTL."""

import logging
import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from nas_api.core.errors import (
    InternalFailureError,
    SessionExpiredError,
    SessionNotFoundError,
)
from nas_api.core.security import generate_token, token_hint
from nas_api.models import Session

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionStore:
    """
    Thread-safe map of token -> Session.

    Expired sessions are evicted lazily when looked up; purge_expired() lets a
    background task bound the map's size but is never required for correctness.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user_id: int) -> Session:
        """Mint a session for user_id expiring at now + TTL."""
        token = generate_token()
        session = Session(token=token, user_id=user_id, expires_at=self._clock() + self._ttl)
        with self._lock:
            if token in self._sessions:
                logger.error("Session token collision; refusing to issue")
                raise InternalFailureError("Failed to generate token")
            self._sessions[token] = session
        return session

    def resolve(self, token: str) -> Session:
        """
        Return the live session for token.

        Raises SessionNotFoundError for unknown tokens and SessionExpiredError
        for expired ones; an expired session is removed as part of the lookup,
        so resolving it again raises SessionNotFoundError.
        """
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                raise SessionNotFoundError("Invalid token")
            if session.is_expired(now):
                del self._sessions[token]
                raise SessionExpiredError("Token expired")
            return session

    def revoke(self, token: str) -> bool:
        """Remove a session. Idempotent; returns whether a session was removed."""
        with self._lock:
            removed = self._sessions.pop(token, None) is not None
        if removed:
            logger.debug("Revoked session %s", token_hint(token))
        return removed

    def revoke_user(self, user_id: int) -> int:
        """Remove every session owned by user_id; returns how many were removed."""
        with self._lock:
            tokens = [t for t, s in self._sessions.items() if s.user_id == user_id]
            for token in tokens:
                del self._sessions[token]
        return len(tokens)

    def purge_expired(self) -> int:
        """Remove all expired sessions; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
