"""Session login/logout and the auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Header

from nas_api.core.errors import (
    SessionExpiredError,
    SessionNotFoundError,
    UnauthenticatedError,
)
from nas_api.core.security import token_hint
from nas_api.core.state import get_authenticator, get_credentials, get_sessions
from nas_api.models import User
from nas_api.schemas import LoginRequest, LoginResponse, MessageResponse, UserOut, UserResponse
from nas_api.services import authorization
from nas_api.services.authenticator import Authenticator, extract_bearer_token
from nas_api.services.credentials import CredentialStore
from nas_api.services.sessions import SessionStore

logger = logging.getLogger(__name__)
router = APIRouter()

# One message for every token failure so responses do not reveal session state.
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


@router.post("/auth/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    session, user = authenticator.login(body.username, body.password)
    return LoginResponse(token=session.token, user=UserOut.from_user(user))


@router.post("/auth/logout", response_model=MessageResponse)
def logout(
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    authorization_header: Annotated[str | None, Header(alias="Authorization")] = None,
) -> MessageResponse:
    """Revoke the caller's session. Revoking an unknown or expired token still succeeds."""
    authenticator.logout(authorization_header)
    return MessageResponse(message="Logged out successfully")


def get_current_user(
    sessions: Annotated[SessionStore, Depends(get_sessions)],
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
    authorization_header: Annotated[str | None, Header(alias="Authorization")] = None,
) -> User:
    """
    Dependency: resolve the caller from the bearer token. Raises 401 if missing or invalid.

    The user is re-read from the credential store on every request, so role
    changes and deletions take effect without waiting for the session to end.
    """
    token = extract_bearer_token(authorization_header)
    if token is None:
        logger.warning("Rejected request: missing token")
        raise UnauthenticatedError("Not authenticated")
    try:
        session = sessions.resolve(token)
    except SessionExpiredError:
        logger.warning("Rejected token %s: expired", token_hint(token))
        raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from None
    except SessionNotFoundError:
        logger.warning("Rejected token %s: unknown", token_hint(token))
        raise UnauthenticatedError(INVALID_TOKEN_MESSAGE) from None

    user = credentials.get_by_id(session.user_id)
    if user is None:
        logger.warning(
            "Rejected token %s: user %s deleted", token_hint(token), session.user_id
        )
        sessions.revoke(token)
        raise UnauthenticatedError(INVALID_TOKEN_MESSAGE)
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    return authorization.require_admin(current_user)


@router.get("/user", response_model=UserResponse)
def get_me(current_user: Annotated[User, Depends(get_current_user)]) -> UserResponse:
    """Return the authenticated caller."""
    return UserResponse(user=UserOut.from_user(current_user))
