"""File identifier for uniquely identifying files by device and inode."""

import os
from typing import Any, Optional

from treeclip.types import PathType


class FileIdentifier:
    """Identifies a file or directory by its device and inode.

    Two paths refer to the same filesystem object exactly when their identifiers
    are equal, regardless of symlinks, relative components or hard links. This is
    what the walker uses to recognize its own output file and to detect symlink loops.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def of(cls, path: PathType) -> Optional["FileIdentifier"]:
        """Return the identifier of path, following symlinks, or None if it cannot be stat'ed."""
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
