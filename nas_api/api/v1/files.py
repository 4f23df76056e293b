"""File browsing and transfer under the storage root (authenticated users)."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from fastapi.responses import FileResponse

from nas_api.api.v1.auth import get_current_user
from nas_api.core.errors import BadRequestError
from nas_api.core.state import get_file_store
from nas_api.models import User
from nas_api.schemas import (
    CreateFolderRequest,
    FileListResponse,
    FolderResponse,
    MessageResponse,
    UploadResponse,
)
from nas_api.services.file_store import FileStore

router = APIRouter()


@router.get("", response_model=FileListResponse)
def list_files(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[FileStore, Depends(get_file_store)],
    path: Annotated[str, Query(description="Folder to list (virtual path)")] = "/",
) -> FileListResponse:
    """List a folder: subfolders first, then files."""
    return FileListResponse.from_listing(store.list_directory(path))


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[FileStore, Depends(get_file_store)],
    file: Annotated[UploadFile | None, File(description="File to store")] = None,
    path: Annotated[str, Query(description="Destination folder (virtual path)")] = "/",
) -> UploadResponse:
    """Upload one file into an existing folder, replacing a file of the same name."""
    if file is None or not file.filename:
        raise BadRequestError("No file uploaded")
    stored_path, size = store.save_upload(path, file.filename, file.file)
    return UploadResponse(
        message="File uploaded successfully",
        filename=file.filename,
        size=size,
        path=stored_path,
    )


@router.get("/download")
def download_file(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[FileStore, Depends(get_file_store)],
    path: Annotated[str, Query(description="File to download (virtual path)")] = "",
) -> FileResponse:
    target = store.open_for_download(path)
    return FileResponse(target, filename=target.name, media_type="application/octet-stream")


@router.delete("", response_model=MessageResponse)
def delete_file(
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[FileStore, Depends(get_file_store)],
    path: Annotated[str, Query(description="File or empty folder to delete")] = "",
) -> MessageResponse:
    store.delete(path)
    return MessageResponse(message="File deleted successfully")


@router.post("/folder", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
def create_folder(
    body: CreateFolderRequest,
    _user: Annotated[User, Depends(get_current_user)],
    store: Annotated[FileStore, Depends(get_file_store)],
) -> FolderResponse:
    folder_path = store.create_folder(body.path, body.name)
    return FolderResponse(message="Folder created successfully", path=folder_path)
