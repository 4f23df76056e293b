"""Schemas for file browsing and transfer endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from nas_api.services.file_store import DirectoryListing, FileEntry


class FileInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    size: int
    is_dir: bool = Field(alias="isDir")
    modified_at: datetime = Field(alias="modTime")

    @classmethod
    def from_entry(cls, entry: FileEntry) -> "FileInfo":
        return cls(
            name=entry.name,
            path=entry.path,
            size=entry.size,
            is_dir=entry.is_dir,
            modified_at=entry.modified_at,
        )


class FileListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_path: str = Field(alias="currentPath")
    files: list[FileInfo]
    total_size: int = Field(alias="totalSize")

    @classmethod
    def from_listing(cls, listing: DirectoryListing) -> "FileListResponse":
        return cls(
            current_path=listing.current_path,
            files=[FileInfo.from_entry(e) for e in listing.entries],
            total_size=listing.total_size,
        )


class UploadResponse(BaseModel):
    message: str
    filename: str
    size: int
    path: str


class CreateFolderRequest(BaseModel):
    path: str = Field(default="/", description="Parent folder (virtual path)")
    name: str = Field(..., min_length=1, max_length=255, description="New folder name")


class FolderResponse(BaseModel):
    message: str
    path: str
