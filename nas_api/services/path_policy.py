"""Path traversal defense shared by file and share operations.

Two layers:

sanitize() is lexical: any ".." segment in the raw path or in a separately
supplied name component is rejected outright, then the path is normalized.

resolve_within() maps a sanitized virtual path (e.g. "/photos/2024") onto the
storage root and verifies containment on the resolved, symlink-following
path, so a symlink inside the root cannot be used to step outside it.
"""

import logging
import posixpath
import re
from pathlib import Path

from nas_api.core.errors import InvalidPathError

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]")


def _has_traversal(value: str) -> bool:
    return any(segment == ".." for segment in _SEPARATORS.split(value))


def sanitize(raw_path: str, *components: str) -> str:
    """
    Return the normalized form of raw_path, or raise InvalidPathError.

    components are extra caller-supplied names (an upload filename, a folder
    or share name) that are checked independently of the path. A component
    must be relative: a leading separator would replace the parent on join.
    """
    if raw_path is None or not raw_path.strip():
        raise InvalidPathError("Path required")
    if "\x00" in raw_path or _has_traversal(raw_path):
        logger.warning("Rejected path %r", raw_path)
        raise InvalidPathError("Invalid path")
    for component in components:
        if (
            not component
            or "\x00" in component
            or component[0] in "/\\"
            or _has_traversal(component)
        ):
            logger.warning("Rejected name %r under path %r", component, raw_path)
            raise InvalidPathError("Invalid path")

    clean = posixpath.normpath(raw_path)
    # POSIX normpath keeps exactly two leading slashes; collapse them.
    if clean.startswith("//"):
        clean = "/" + clean.lstrip("/")
    return clean


def join(clean_path: str, name: str) -> str:
    """Join a sanitized path and a sanitized name into a virtual path."""
    return posixpath.normpath(posixpath.join(clean_path, name))


def resolve_within(root: Path, virtual_path: str) -> Path:
    """
    Map virtual_path under root and return the resolved filesystem path.

    Raises InvalidPathError if the resolved path is not root or inside it.
    """
    root_real = root.resolve()
    relative = virtual_path.lstrip("/")
    target = (root_real / relative).resolve() if relative else root_real
    if target != root_real and root_real not in target.parents:
        logger.warning("Rejected path %r: resolves outside storage root", virtual_path)
        raise InvalidPathError("Invalid path")
    return target


def to_virtual(root: Path, real_path: Path) -> str:
    """Inverse of resolve_within for paths already known to be inside root."""
    relative = real_path.relative_to(root.resolve()).as_posix()
    return "/" if relative == "." else "/" + relative
