"""File browsing and transfer confined to the storage root."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import BinaryIO

from nas_api.core.errors import BadRequestError, NotFoundError
from nas_api.services import path_policy

logger = logging.getLogger(__name__)

COPY_CHUNK_BYTES = 1024 * 1024


@dataclass(frozen=True)
class FileEntry:
    name: str
    path: str
    size: int
    is_dir: bool
    modified_at: datetime


@dataclass(frozen=True)
class DirectoryListing:
    current_path: str
    entries: list[FileEntry]
    total_size: int


class FileStore:
    """
    Directory listing, upload, download, delete and mkdir under one root.

    Every public method takes virtual paths as sent by clients and runs them
    through path_policy before touching the filesystem.
    """

    def __init__(self, root: Path, max_upload_bytes: int) -> None:
        self.root = root
        self.max_upload_bytes = max_upload_bytes

    def _resolve(self, raw_path: str, *components: str) -> tuple[str, Path]:
        clean = path_policy.sanitize(raw_path, *components)
        for component in components:
            clean = path_policy.join(clean, component)
        return clean, path_policy.resolve_within(self.root, clean)

    def list_directory(self, raw_path: str = "/") -> DirectoryListing:
        """List a directory: folders first, then files, each sorted by name."""
        _, target = self._resolve(raw_path)
        if not target.exists():
            raise NotFoundError("Directory not found")
        if not target.is_dir():
            raise BadRequestError("Not a directory")

        entries: list[FileEntry] = []
        total_size = 0
        for child in target.iterdir():
            try:
                info = child.stat()
            except OSError:
                # Dangling symlink or entry removed while listing.
                continue
            is_dir = child.is_dir()
            if not is_dir:
                total_size += info.st_size
            entries.append(
                FileEntry(
                    name=child.name,
                    path=path_policy.to_virtual(self.root, target / child.name),
                    size=info.st_size,
                    is_dir=is_dir,
                    modified_at=datetime.fromtimestamp(info.st_mtime, UTC),
                )
            )
        entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))
        return DirectoryListing(
            current_path=path_policy.to_virtual(self.root, target),
            entries=entries,
            total_size=total_size,
        )

    def save_upload(self, raw_dir: str, filename: str, source: BinaryIO) -> tuple[str, int]:
        """
        Stream source into raw_dir/filename; returns (virtual path, bytes written).

        Uploads larger than max_upload_bytes are removed and rejected.
        """
        if not filename or "/" in filename or "\\" in filename:
            raise BadRequestError("Invalid filename")
        _, directory = self._resolve(raw_dir)
        if not directory.is_dir():
            raise NotFoundError("Directory not found")
        virtual, dest = self._resolve(raw_dir, filename)
        if dest.is_dir():
            raise BadRequestError("A folder with that name already exists")

        written = 0
        try:
            with dest.open("wb") as out:
                while True:
                    chunk = source.read(COPY_CHUNK_BYTES)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_upload_bytes:
                        raise BadRequestError("File too large")
                    out.write(chunk)
        except BaseException:
            # Never leave a truncated file behind.
            dest.unlink(missing_ok=True)
            raise
        logger.info("Stored upload %s (%s bytes)", virtual, written)
        return virtual, written

    def open_for_download(self, raw_path: str) -> Path:
        """Return the filesystem path of a regular file for streaming."""
        _, target = self._resolve(raw_path)
        if not target.is_file():
            raise NotFoundError("File not found")
        return target

    def delete(self, raw_path: str) -> str:
        """Delete a file or an empty directory; the root itself is never deleted."""
        virtual, target = self._resolve(raw_path)
        if target == self.root.resolve():
            raise BadRequestError("Cannot delete the storage root")
        if not target.exists():
            raise NotFoundError("File not found")
        if target.is_dir():
            try:
                target.rmdir()
            except OSError as e:
                raise BadRequestError("Directory is not empty") from e
        else:
            target.unlink()
        logger.info("Deleted %s", virtual)
        return virtual

    def create_folder(self, raw_path: str, name: str) -> str:
        """Create raw_path/name (and any missing parents); returns its virtual path."""
        virtual, target = self._resolve(raw_path, name)
        if target.exists() and not target.is_dir():
            raise BadRequestError("A file with that name already exists")
        target.mkdir(parents=True, exist_ok=True)
        logger.info("Created folder %s", virtual)
        return virtual

    def ensure_directory(self, virtual_path: str) -> Path:
        """Create a sanitized virtual directory if missing (used for share roots)."""
        _, target = self._resolve(virtual_path)
        target.mkdir(parents=True, exist_ok=True)
        return target

