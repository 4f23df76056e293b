"""User identity record and the closed set of roles."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """Flat two-role model; there is no hierarchy beyond admin vs user."""

    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class User:
    """
    User account as seen outside the credential store.

    Carries no password material: hashes live in the store's separate
    credential map. Instances are immutable snapshots; the store replaces
    them on update (e.g. last_login) instead of mutating shared state.
    """

    id: int
    username: str
    email: str
    role: Role
    created_at: datetime
    last_login: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
