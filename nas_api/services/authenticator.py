"""Login and logout: the only path that turns a password check into a session."""

import logging
import threading
import zlib

from nas_api.core.errors import BadRequestError, InvalidCredentialsError
from nas_api.core.security import token_hint
from nas_api.models import Session, User
from nas_api.services.credentials import INVALID_CREDENTIALS_MESSAGE, CredentialStore
from nas_api.services.sessions import SessionStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
LOGIN_LOCK_STRIPES = 64


def extract_bearer_token(header_value: str | None) -> str | None:
    """
    Pull the raw token out of an Authorization header value.

    A leading "Bearer " (case-sensitive, with the space) is stripped; without
    it the whole value is the token. Returns None when the header is missing
    or empty.
    """
    if not header_value:
        return None
    if len(header_value) > len(BEARER_PREFIX) and header_value.startswith(BEARER_PREFIX):
        return header_value[len(BEARER_PREFIX):]
    return header_value


class Authenticator:
    """Couples CredentialStore.verify to SessionStore.issue."""

    def __init__(self, credentials: CredentialStore, sessions: SessionStore) -> None:
        self.credentials = credentials
        self.sessions = sessions
        # Striped so concurrent logins for one username serialize without a lock per name.
        self._login_locks = [threading.Lock() for _ in range(LOGIN_LOCK_STRIPES)]

    def _lock_for(self, username: str) -> threading.Lock:
        index = zlib.crc32(username.encode("utf-8")) % LOGIN_LOCK_STRIPES
        return self._login_locks[index]

    def login(self, username: str, password: str) -> tuple[Session, User]:
        """
        Verify credentials and issue a session.

        Each call's verify-then-issue pair runs under the username's login
        lock, and every successful call gets its own independent session.

        The lock is held across the bcrypt check, so a burst of attempts
        against one username (or any name hashing to the same stripe) delays
        other logins in that stripe by one hash each. Other stripes are not
        affected. Rate limiting belongs in front of this service.
        """
        with self._lock_for(username):
            try:
                user = self.credentials.verify(username, password)
            except InvalidCredentialsError:
                logger.warning("Failed login for username %r", username)
                raise
            session = self.sessions.issue(user.id)
            updated = self.credentials.record_login(user.id)
            if updated is None:
                # Deleted between verify and issue; do not leave a session behind.
                self.sessions.revoke(session.token)
                logger.warning("Login raced with deletion of user %r", username)
                raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
        logger.info(
            "User %s (id=%s) logged in, session %s",
            username,
            user.id,
            token_hint(session.token),
        )
        return session, updated

    def logout(self, authorization: str | None) -> None:
        """Revoke the session named by an Authorization header value."""
        token = extract_bearer_token(authorization)
        if token is None:
            raise BadRequestError("No token provided")
        if self.sessions.revoke(token):
            logger.info("Session %s logged out", token_hint(token))
