"""Request/response schemas for auth and user management endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from nas_api.models import User


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class UserOut(BaseModel):
    """User as returned to clients (no password material)."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    email: str
    role: Literal["admin", "user"]
    created_at: datetime = Field(alias="created")
    last_login: datetime | None = Field(default=None, alias="lastLogin")

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=user.role.value,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class LoginResponse(BaseModel):
    """Session token returned after successful login."""

    token: str = Field(..., description="Opaque bearer token")
    user: UserOut


class UserResponse(BaseModel):
    user: UserOut


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserOut]


class CreateUserRequest(BaseModel):
    """Body for POST /users (admin only)."""

    username: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["admin", "user"] = "user"
