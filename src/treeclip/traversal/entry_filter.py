"""Admission gate applied to every entry met during a walk."""

import os
from pathlib import Path

from treeclip.exclusion_rules.base_rules import BaseExclusionRules
from treeclip.types import PathType

from .events import EventKind, EventSink, TraversalEvent, null_sink


def is_hidden(path: PathType) -> bool:
    """Check whether the final component of path starts with a dot.

    Only the name is inspected; platform hidden attributes are ignored. The name is
    taken from the absolute form of path, so ``.`` and ``..`` are judged by the
    directory they stand for.

    Example:
        >>> is_hidden("project/.env")
        True
        >>> is_hidden("project/src")
        False
    """
    return os.path.basename(os.path.abspath(path)).startswith(".")


class EntryFilter:
    """Bundles exclusion rules and the hidden-entry policy for one walk.

    Refusing a directory prunes its whole subtree: the walker never descends into
    it, so nothing beneath it can reach the bundle.

    Attributes:
        exclusion_rules (BaseExclusionRules): Rules consulted for every entry.
        skip_hidden (bool): Whether hidden entries are refused.
    """

    def __init__(self, exclusion_rules: BaseExclusionRules, skip_hidden: bool = True, sink: EventSink = null_sink):
        self.exclusion_rules = exclusion_rules
        self.skip_hidden = skip_hidden
        self._sink = sink

    def admit(self, path: PathType, is_dir: bool) -> bool:
        """Decide whether a walk should include a file or descend into a directory.

        Hidden entries that are refused are reported to the sink. Entries refused by
        an exclusion rule are not reported.

        Args:
            path: The entry's path.
            is_dir: Whether the entry is a directory. Directories are matched with
                directory semantics.

        Returns:
            bool: False if the entry is excluded, or hidden while skip_hidden is set.
        """
        if self.exclusion_rules.is_excluded(path, is_dir=is_dir):
            return False
        if self.skip_hidden and is_hidden(path):
            self._sink(TraversalEvent(EventKind.HIDDEN_SKIPPED, f"Hidden entry '{path}' was skipped", Path(path)))
            return False
        return True


def admit(path: PathType, is_dir: bool, exclusion_rules: BaseExclusionRules, skip_hidden: bool) -> bool:
    """Apply the admission rules of EntryFilter once, without reporting.

    Example:
        >>> from treeclip.exclusion_rules import GitIgnoreExclusionRules
        >>> rules = GitIgnoreExclusionRules("/project", ["*.log"])
        >>> admit("/project/app.log", False, rules, skip_hidden=True)
        False
        >>> admit("/project/main.py", False, rules, skip_hidden=True)
        True
    """
    return EntryFilter(exclusion_rules, skip_hidden=skip_hidden).admit(path, is_dir)
