from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryKind(Enum):
    """Kind of a filesystem entry discovered during a walk.

    Attributes:
        FILE: Regular file (or a symlink resolving to one)
        DIRECTORY: Directory
        SYMLINK: Symbolic link that is not followed
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
