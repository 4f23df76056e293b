"""Unit tests for nas_api.services.sessions: issuance, TTL, lazy eviction, revocation."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

from nas_api.core.errors import (
    InternalFailureError,
    SessionExpiredError,
    SessionNotFoundError,
    UnauthenticatedError,
)
from nas_api.services import sessions as sessions_module
from nas_api.services.sessions import DEFAULT_SESSION_TTL, SessionStore


class _Clock:
    """Manually advanced clock for expiry tests."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class TestIssue(unittest.TestCase):
    """issue mints high-entropy, unique tokens with expiry = now + TTL."""

    def test_default_ttl_is_24_hours(self) -> None:
        self.assertEqual(DEFAULT_SESSION_TTL, timedelta(hours=24))

    def test_expiry_set_at_creation(self) -> None:
        clock = _Clock()
        session = SessionStore(clock=clock).issue(7)
        self.assertEqual(session.user_id, 7)
        self.assertEqual(session.expires_at, clock.now + timedelta(hours=24))

    def test_token_is_256_bit_hex(self) -> None:
        token = SessionStore().issue(1).token
        self.assertEqual(len(token), 64)
        int(token, 16)

    def test_tokens_never_repeat(self) -> None:
        store = SessionStore()
        tokens = {store.issue(1).token for _ in range(2000)}
        self.assertEqual(len(tokens), 2000)
        self.assertEqual(store.count(), 2000)


class TestResolve(unittest.TestCase):
    """resolve returns live sessions, evicts expired ones on lookup."""

    def setUp(self) -> None:
        self.clock = _Clock()
        self.store = SessionStore(clock=self.clock)

    def test_live_session_resolves_to_owner(self) -> None:
        session = self.store.issue(3)
        self.clock.advance(timedelta(hours=23, minutes=59))
        self.assertEqual(self.store.resolve(session.token).user_id, 3)

    def test_exactly_at_expiry_still_valid(self) -> None:
        session = self.store.issue(3)
        self.clock.advance(timedelta(hours=24))
        self.assertEqual(self.store.resolve(session.token).user_id, 3)

    def test_expired_then_absent(self) -> None:
        session = self.store.issue(3)
        self.clock.advance(timedelta(hours=24, seconds=1))
        with self.assertRaises(SessionExpiredError):
            self.store.resolve(session.token)
        with self.assertRaises(SessionNotFoundError):
            self.store.resolve(session.token)
        self.assertEqual(self.store.count(), 0)

    def test_unknown_token(self) -> None:
        with self.assertRaises(SessionNotFoundError):
            self.store.resolve("deadbeef")

    def test_both_failures_are_unauthenticated(self) -> None:
        self.assertTrue(issubclass(SessionExpiredError, UnauthenticatedError))
        self.assertTrue(issubclass(SessionNotFoundError, UnauthenticatedError))


class TestRevoke(unittest.TestCase):
    """revoke is idempotent; revoke_user and purge_expired remove in bulk."""

    def setUp(self) -> None:
        self.clock = _Clock()
        self.store = SessionStore(clock=self.clock)

    def test_revoke_is_idempotent(self) -> None:
        session = self.store.issue(1)
        self.assertTrue(self.store.revoke(session.token))
        self.assertFalse(self.store.revoke(session.token))
        self.assertFalse(self.store.revoke("never-issued"))
        with self.assertRaises(SessionNotFoundError):
            self.store.resolve(session.token)

    def test_revoke_user_only_touches_that_user(self) -> None:
        a1 = self.store.issue(1)
        a2 = self.store.issue(1)
        b = self.store.issue(2)
        self.assertEqual(self.store.revoke_user(1), 2)
        for token in (a1.token, a2.token):
            with self.assertRaises(SessionNotFoundError):
                self.store.resolve(token)
        self.assertEqual(self.store.resolve(b.token).user_id, 2)

    def test_purge_expired(self) -> None:
        old = self.store.issue(1)
        self.clock.advance(timedelta(hours=12))
        fresh = self.store.issue(2)
        self.clock.advance(timedelta(hours=13))
        self.assertEqual(self.store.purge_expired(), 1)
        self.assertEqual(self.store.count(), 1)
        with self.assertRaises(SessionNotFoundError):
            self.store.resolve(old.token)
        self.assertEqual(self.store.resolve(fresh.token).user_id, 2)

    def test_custom_ttl(self) -> None:
        store = SessionStore(ttl=timedelta(hours=1), clock=self.clock)
        session = store.issue(1)
        self.clock.advance(timedelta(hours=1, seconds=1))
        with self.assertRaises(SessionExpiredError):
            store.resolve(session.token)


class TestTokenCollision(unittest.TestCase):
    def test_colliding_token_is_refused(self) -> None:
        store = SessionStore()
        with patch.object(sessions_module, "generate_token", return_value="f" * 64):
            first = store.issue(user_id=1)
            with self.assertRaises(InternalFailureError) as ctx:
                store.issue(user_id=2)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.message, "Failed to generate token")
        self.assertEqual(store.resolve(first.token).user_id, 1)
        self.assertEqual(store.count(), 1)
