"""Session record: a bearer capability bound to a user id."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Session:
    token: str
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
