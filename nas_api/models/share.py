"""File share definition."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Share:
    """
    A named share exported from a directory under the storage root.

    path is the virtual path (e.g. /media), not the host filesystem path.
    """

    name: str
    path: str
    comment: str = ""
    read_only: bool = False
    guest_access: bool = False
    users: tuple[str, ...] = field(default_factory=tuple)
