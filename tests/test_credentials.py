"""Unit tests for nas_api.services.credentials: hashing, verification, protection, concurrency."""

import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from nas_api.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ProtectedAccountError,
)
from nas_api.models import Role
from nas_api.services import credentials as credentials_module
from nas_api.services.credentials import CredentialStore


def _store() -> CredentialStore:
    """Low bcrypt cost keeps the suite fast."""
    return CredentialStore(bcrypt_rounds=4)


class TestCreate(unittest.TestCase):
    """create assigns ids, defaults the role, and rejects duplicate usernames."""

    def test_ids_are_monotonic(self) -> None:
        store = _store()
        first = store.create("alice", "alice@example.com", "secret1")
        second = store.create("bob", "bob@example.com", "secret2")
        self.assertEqual(first.id, 1)
        self.assertEqual(second.id, 2)

    def test_default_role_is_user(self) -> None:
        user = _store().create("alice", "alice@example.com", "secret1")
        self.assertIs(user.role, Role.USER)
        self.assertIsNone(user.last_login)

    def test_duplicate_username_conflicts(self) -> None:
        store = _store()
        store.create("alice", "alice@example.com", "secret1")
        with self.assertRaises(ConflictError):
            store.create("alice", "other@example.com", "secret2")

    def test_usernames_are_case_sensitive(self) -> None:
        store = _store()
        store.create("alice", "a@example.com", "secret1")
        user = store.create("Alice", "b@example.com", "secret2")
        self.assertEqual(user.username, "Alice")
        self.assertEqual(store.count(), 2)

    def test_user_record_carries_no_password(self) -> None:
        user = _store().create("alice", "alice@example.com", "secret1")
        self.assertNotIn("secret1", repr(user))
        self.assertFalse(hasattr(user, "password"))
        self.assertFalse(hasattr(user, "password_hash"))

    def test_concurrent_creates_of_same_name_yield_one_user(self) -> None:
        store = _store()

        def attempt(i: int) -> bool:
            try:
                store.create("racer", f"r{i}@example.com", "secret1")
                return True
            except ConflictError:
                return False

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(8)))
        self.assertEqual(results.count(True), 1)
        self.assertEqual(store.count(), 1)


class TestVerify(unittest.TestCase):
    """verify accepts the creation password and rejects anything else uniformly."""

    def setUp(self) -> None:
        self.store = _store()
        self.store.create("alice", "alice@example.com", "correct horse")

    def test_correct_password(self) -> None:
        self.assertEqual(self.store.verify("alice", "correct horse").username, "alice")

    def test_wrong_password(self) -> None:
        with self.assertRaises(InvalidCredentialsError):
            self.store.verify("alice", "correct horse!")

    def test_unknown_user_same_error_and_message(self) -> None:
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.store.verify("mallory", "correct horse")
        with self.assertRaises(InvalidCredentialsError) as wrong:
            self.store.verify("alice", "nope")
        self.assertEqual(unknown.exception.message, wrong.exception.message)

    def test_unknown_user_still_runs_a_hash_check(self) -> None:
        with patch.object(
            credentials_module, "verify_password", wraps=credentials_module.verify_password
        ) as spy:
            with self.assertRaises(InvalidCredentialsError):
                self.store.verify("mallory", "anything")
        spy.assert_called_once()

    def test_long_passwords_do_not_collide(self) -> None:
        long_password = "a" * 100
        self.store.create("longpass", "l@example.com", long_password)
        self.assertEqual(self.store.verify("longpass", long_password).username, "longpass")
        with self.assertRaises(InvalidCredentialsError):
            self.store.verify("longpass", "a" * 101)


class TestDelete(unittest.TestCase):
    """delete removes user and credential together; admin is protected."""

    def test_delete_then_verify_fails(self) -> None:
        store = _store()
        store.create("alice", "alice@example.com", "secret1")
        store.delete("alice")
        self.assertIsNone(store.get("alice"))
        with self.assertRaises(InvalidCredentialsError):
            store.verify("alice", "secret1")

    def test_unknown_user(self) -> None:
        with self.assertRaises(NotFoundError):
            _store().delete("ghost")

    def test_admin_protected_whether_or_not_it_exists(self) -> None:
        empty = _store()
        with self.assertRaises(ProtectedAccountError):
            empty.delete("admin")
        provisioned = _store()
        provisioned.ensure_bootstrap_admin("admin@nas-os.local", "admin123")
        with self.assertRaises(ProtectedAccountError):
            provisioned.delete("admin")
        self.assertIsNotNone(provisioned.get("admin"))

    def test_name_can_be_reused_after_delete(self) -> None:
        store = _store()
        old = store.create("alice", "alice@example.com", "secret1")
        store.delete("alice")
        new = store.create("alice", "alice@example.com", "secret2")
        self.assertNotEqual(old.id, new.id)


class TestBootstrapAndQueries(unittest.TestCase):
    """Bootstrap provisioning, listing and last-login bookkeeping."""

    def test_bootstrap_creates_admin_once(self) -> None:
        store = _store()
        admin = store.ensure_bootstrap_admin("admin@nas-os.local", "admin123")
        self.assertIsNotNone(admin)
        self.assertIs(admin.role, Role.ADMIN)
        self.assertIsNone(store.ensure_bootstrap_admin("admin@nas-os.local", "other"))
        self.assertEqual(store.verify("admin", "admin123").id, admin.id)

    def test_bootstrap_skipped_when_users_exist(self) -> None:
        store = _store()
        store.create("alice", "alice@example.com", "secret1")
        self.assertIsNone(store.ensure_bootstrap_admin("admin@nas-os.local", "admin123"))
        self.assertIsNone(store.get("admin"))

    def test_list_is_ordered_snapshot(self) -> None:
        store = _store()
        store.create("zed", "z@example.com", "secret1")
        store.create("amy", "a@example.com", "secret2")
        users = store.list()
        self.assertEqual([u.username for u in users], ["zed", "amy"])
        users.clear()
        self.assertEqual(store.count(), 2)

    def test_record_login_replaces_snapshot(self) -> None:
        store = _store()
        user = store.create("alice", "alice@example.com", "secret1")
        updated = store.record_login(user.id)
        self.assertIsNotNone(updated.last_login)
        self.assertIsNone(user.last_login)
        self.assertEqual(store.get_by_id(user.id).last_login, updated.last_login)

    def test_record_login_for_missing_user(self) -> None:
        self.assertIsNone(_store().record_login(42))
