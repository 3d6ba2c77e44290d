import os
from abc import ABC, abstractmethod
from typing import Optional

from treeclip.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Implementations decide whether a path should be left out of a bundle. Two entry
    points are offered: exclude() works on a path string that is already relative to
    the exclusion root and uses forward slashes, while is_excluded() accepts any
    filesystem path and takes care of relativizing it and of directory semantics.

    Example:
        >>> class NoLogs(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.endswith('.log')
        ...     def relative_path(self, path) -> str:
        ...         return os.fspath(path)
        >>> rules = NoLogs()
        >>> rules.exclude("build/debug.log")
        True
        >>> rules.exclude("main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given relative path should be excluded.

        Args:
            path (str): Path relative to the exclusion root, using forward slashes. A
                trailing slash marks the path as a directory.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    @abstractmethod
    def relative_path(self, path: PathType) -> str:
        """Return the forward-slash form of path shown to the user."""
        pass

    def match_path(self, path: PathType) -> str:
        """Return the forward-slash form of path that exclude() is given. Defaults to relative_path()."""
        return self.relative_path(path)

    def is_excluded(self, path: PathType, is_dir: Optional[bool] = None) -> bool:
        """
        Determine if a filesystem path should be excluded.

        Directories are matched with directory semantics so that directory-only
        patterns such as ``target/`` apply to them.

        Args:
            path: Any path-like object.
            is_dir: Whether path is a directory. Looked up on the filesystem when omitted.

        Returns:
            bool: True if the path should be excluded.
        """
        relative = self.match_path(path)
        if not relative:
            return False
        if is_dir is None:
            is_dir = os.path.isdir(path)
        return self.exclude(relative + "/" if is_dir else relative)
