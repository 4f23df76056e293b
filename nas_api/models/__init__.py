"""In-memory records owned by the identity and share stores."""

from nas_api.models.session import Session
from nas_api.models.share import Share
from nas_api.models.user import Role, User

__all__ = ["Role", "Session", "Share", "User"]
