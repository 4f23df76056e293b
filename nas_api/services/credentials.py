"""Credential store: user records plus their password hashes, held in memory."""

import logging
import threading
from dataclasses import replace
from datetime import UTC, datetime

from nas_api.core.config import BOOTSTRAP_ADMIN_USERNAME
from nas_api.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ProtectedAccountError,
)
from nas_api.core.security import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password
from nas_api.models import Role, User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class CredentialStore:
    """
    Thread-safe registry of users keyed by case-sensitive username.

    Every user has exactly one password hash, inserted and removed together
    with the user under the same lock. Bcrypt work happens outside the lock
    so slow hashing never blocks lookups from other requests. Readers get
    immutable User snapshots; nothing here hands out live state.
    """

    def __init__(self, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._bcrypt_rounds = bcrypt_rounds
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._password_hashes: dict[str, str] = {}
        self._next_id = 1
        # Compared against when the username is unknown so both failure paths cost one bcrypt check.
        self._dummy_hash = hash_password("not-a-real-password", rounds=bcrypt_rounds)

    def create(
        self,
        username: str,
        email: str,
        password: str,
        role: Role = Role.USER,
    ) -> User:
        """Create a user; raises ConflictError if the username is taken."""
        with self._lock:
            if username in self._users:
                raise ConflictError("Username already exists")

        password_hash = hash_password(password, rounds=self._bcrypt_rounds)

        with self._lock:
            # Re-check: another request may have claimed the name while we hashed.
            if username in self._users:
                raise ConflictError("Username already exists")
            user = User(
                id=self._next_id,
                username=username,
                email=email,
                role=role,
                created_at=datetime.now(UTC),
            )
            self._next_id += 1
            self._users[username] = user
            self._password_hashes[username] = password_hash
        logger.info("Created user %s (id=%s, role=%s)", username, user.id, role.value)
        return user

    def verify(self, username: str, password: str) -> User:
        """
        Return the user if the password matches, else raise InvalidCredentialsError.

        Unknown usernames and wrong passwords raise the same error after the
        same amount of bcrypt work.
        """
        with self._lock:
            user = self._users.get(username)
            password_hash = self._password_hashes.get(username, self._dummy_hash)
        matches = verify_password(password, password_hash)
        if user is None or not matches:
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
        return user

    def delete(self, username: str) -> User:
        """Remove a user and its credential. The bootstrap admin can never be removed."""
        if username == BOOTSTRAP_ADMIN_USERNAME:
            raise ProtectedAccountError("Cannot delete admin user")
        with self._lock:
            user = self._users.pop(username, None)
            if user is None:
                raise NotFoundError("User not found")
            del self._password_hashes[username]
        logger.info("Deleted user %s (id=%s)", username, user.id)
        return user

    def get(self, username: str) -> User | None:
        with self._lock:
            return self._users.get(username)

    def get_by_id(self, user_id: int) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.id == user_id:
                    return user
        return None

    def list(self) -> list[User]:
        """Snapshot of all users ordered by id (no password material)."""
        with self._lock:
            users = list(self._users.values())
        return sorted(users, key=lambda u: u.id)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def record_login(self, user_id: int, when: datetime | None = None) -> User | None:
        """Set last_login on the user with this id; None if the user no longer exists."""
        when = when or datetime.now(UTC)
        with self._lock:
            for username, user in self._users.items():
                if user.id == user_id:
                    updated = replace(user, last_login=when)
                    self._users[username] = updated
                    return updated
        return None

    def ensure_bootstrap_admin(self, email: str, password: str) -> User | None:
        """
        First-run provisioning: create the admin account if no users exist.

        Returns the created user, or None when the store was already populated.
        """
        with self._lock:
            if self._users:
                return None
        try:
            user = self.create(BOOTSTRAP_ADMIN_USERNAME, email, password, role=Role.ADMIN)
        except ConflictError:
            return None
        logger.info("Provisioned bootstrap account %r", BOOTSTRAP_ADMIN_USERNAME)
        return user
