"""In-memory registry of file shares."""

import logging
import re
import threading
from collections.abc import Iterable

from nas_api.core.errors import BadRequestError, ConflictError, NotFoundError
from nas_api.models import Share
from nas_api.services import path_policy
from nas_api.services.file_store import FileStore

logger = logging.getLogger(__name__)

SHARE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,64}$")


def validate_share_name(name: str) -> str:
    """Share names are single tokens: no whitespace, separators or traversal."""
    if not name or not SHARE_NAME_PATTERN.match(name) or name in (".", ".."):
        raise BadRequestError("Invalid share name")
    path_policy.sanitize("/", name)
    return name


class ShareRegistry:
    """Thread-safe map of share name -> Share, backed by directories in the file store."""

    def __init__(self, file_store: FileStore) -> None:
        self._file_store = file_store
        self._lock = threading.Lock()
        self._shares: dict[str, Share] = {}

    def list(self) -> list[Share]:
        with self._lock:
            shares = list(self._shares.values())
        return sorted(shares, key=lambda s: s.name)

    def get(self, name: str) -> Share:
        with self._lock:
            share = self._shares.get(name)
        if share is None:
            raise NotFoundError("Share not found")
        return share

    def create(
        self,
        name: str,
        path: str,
        comment: str = "",
        read_only: bool = False,
        guest_access: bool = False,
        users: Iterable[str] = (),
    ) -> Share:
        """Register a share and create its directory under the storage root."""
        validate_share_name(name)
        clean_path = path_policy.sanitize(path)
        if not clean_path.startswith("/"):
            clean_path = "/" + clean_path
        with self._lock:
            if name in self._shares:
                raise ConflictError("Share already exists")
        self._file_store.ensure_directory(clean_path)

        share = Share(
            name=name,
            path=clean_path,
            comment=comment,
            read_only=read_only,
            guest_access=guest_access,
            users=tuple(users),
        )
        with self._lock:
            if name in self._shares:
                raise ConflictError("Share already exists")
            self._shares[name] = share
        logger.info("Created share %s at %s", name, clean_path)
        return share

    def delete(self, name: str) -> Share:
        """Unregister a share; its directory and contents are left in place."""
        with self._lock:
            share = self._shares.pop(name, None)
        if share is None:
            raise NotFoundError("Share not found")
        logger.info("Deleted share %s", name)
        return share
