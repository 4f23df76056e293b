"""Role checks for admin-only operations.

Every role decision goes through this module so the policy can be audited in
one place; handlers never compare role strings themselves.
"""

import logging

from nas_api.core.config import BOOTSTRAP_ADMIN_USERNAME
from nas_api.core.errors import ForbiddenError, ProtectedAccountError
from nas_api.models import Role, User

logger = logging.getLogger(__name__)


def require_role(user: User, role: Role) -> User:
    """Return user if it holds role, else raise ForbiddenError."""
    if user.role is not role:
        logger.warning(
            "Forbidden: user %s (role=%s) needs role %s",
            user.username,
            user.role.value,
            role.value,
        )
        raise ForbiddenError("Admin access required" if role is Role.ADMIN else "Access denied")
    return user


def require_admin(user: User) -> User:
    return require_role(user, Role.ADMIN)


def ensure_deletable(username: str) -> None:
    """The bootstrap admin account can never be deleted, whoever asks."""
    if username == BOOTSTRAP_ADMIN_USERNAME:
        raise ProtectedAccountError("Cannot delete admin user")
