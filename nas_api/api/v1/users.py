"""User administration (admin only)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from nas_api.api.v1.auth import require_admin
from nas_api.core.state import get_credentials, get_sessions
from nas_api.models import Role, User
from nas_api.schemas import (
    CreateUserRequest,
    MessageResponse,
    UserOut,
    UserResponse,
    UsersListResponse,
)
from nas_api.services import authorization
from nas_api.services.credentials import CredentialStore
from nas_api.services.sessions import SessionStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(users=[UserOut.from_user(u) for u in credentials.list()])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: Annotated[User, Depends(require_admin)],
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
) -> UserResponse:
    """Create a user (admin only). Role defaults to 'user'."""
    user = credentials.create(
        username=body.username,
        email=str(body.email),
        password=body.password,
        role=Role(body.role),
    )
    logger.info("User %s created by %s", user.username, admin.username)
    return UserResponse(user=UserOut.from_user(user))


@router.delete("/{username}", response_model=MessageResponse)
def delete_user(
    username: str,
    admin: Annotated[User, Depends(require_admin)],
    credentials: Annotated[CredentialStore, Depends(get_credentials)],
    sessions: Annotated[SessionStore, Depends(get_sessions)],
) -> MessageResponse:
    """
    Delete a user (admin only) and revoke all of its sessions.
    The bootstrap admin account can never be deleted.
    """
    authorization.ensure_deletable(username)
    user = credentials.delete(username)
    revoked = sessions.revoke_user(user.id)
    logger.info(
        "User %s deleted by %s; %s session(s) revoked", username, admin.username, revoked
    )
    return MessageResponse(message="User deleted successfully")
