"""Share configuration: anyone signed in may list, only admins may change."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from nas_api.api.v1.auth import get_current_user, require_admin
from nas_api.core.state import get_shares
from nas_api.models import User
from nas_api.schemas import (
    MessageResponse,
    ShareIn,
    ShareOut,
    ShareResponse,
    SharesListResponse,
)
from nas_api.services.shares import ShareRegistry

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=SharesListResponse)
def list_shares(
    _user: Annotated[User, Depends(get_current_user)],
    shares: Annotated[ShareRegistry, Depends(get_shares)],
) -> SharesListResponse:
    return SharesListResponse(shares=[ShareOut.from_share(s) for s in shares.list()])


@router.post("", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
def create_share(
    body: ShareIn,
    admin: Annotated[User, Depends(require_admin)],
    shares: Annotated[ShareRegistry, Depends(get_shares)],
) -> ShareResponse:
    """Register a share; its folder is created under the storage root if missing."""
    share = shares.create(
        name=body.name,
        path=body.path,
        comment=body.comment,
        read_only=body.read_only,
        guest_access=body.guest_access,
        users=body.users,
    )
    logger.info("Share %s created by %s", share.name, admin.username)
    return ShareResponse(share=ShareOut.from_share(share))


@router.delete("/{name}", response_model=MessageResponse)
def delete_share(
    name: str,
    admin: Annotated[User, Depends(require_admin)],
    shares: Annotated[ShareRegistry, Depends(get_shares)],
) -> MessageResponse:
    """Remove a share definition. The folder and its contents are kept."""
    shares.delete(name)
    logger.info("Share %s deleted by %s", name, admin.username)
    return MessageResponse(message=f"Share '{name}' deleted successfully")
