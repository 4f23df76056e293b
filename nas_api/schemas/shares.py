"""Schemas for share configuration endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from nas_api.models import Share


class ShareIn(BaseModel):
    """Body for POST /samba/shares. Accepts the camelCase names the web UI sends."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=64)
    path: str = Field(..., min_length=1)
    comment: str = Field(default="", max_length=255)
    read_only: bool = Field(default=False, alias="readOnly")
    guest_access: bool = Field(default=False, alias="guestAccess")
    users: list[str] = Field(default_factory=list)


class ShareOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    comment: str
    read_only: bool = Field(alias="readOnly")
    guest_access: bool = Field(alias="guestAccess")
    users: list[str]

    @classmethod
    def from_share(cls, share: Share) -> "ShareOut":
        return cls(
            name=share.name,
            path=share.path,
            comment=share.comment,
            read_only=share.read_only,
            guest_access=share.guest_access,
            users=list(share.users),
        )


class ShareResponse(BaseModel):
    share: ShareOut


class SharesListResponse(BaseModel):
    shares: list[ShareOut]
