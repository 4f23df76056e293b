"""Pydantic request/response schemas."""

from nas_api.schemas.auth import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    UserOut,
    UserResponse,
    UsersListResponse,
)
from nas_api.schemas.common import MessageResponse
from nas_api.schemas.files import (
    CreateFolderRequest,
    FileInfo,
    FileListResponse,
    FolderResponse,
    UploadResponse,
)
from nas_api.schemas.health import HealthResponse
from nas_api.schemas.shares import ShareIn, ShareOut, ShareResponse, SharesListResponse

__all__ = [
    "CreateFolderRequest",
    "CreateUserRequest",
    "FileInfo",
    "FileListResponse",
    "FolderResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ShareIn",
    "ShareOut",
    "ShareResponse",
    "SharesListResponse",
    "UploadResponse",
    "UserOut",
    "UserResponse",
    "UsersListResponse",
]
