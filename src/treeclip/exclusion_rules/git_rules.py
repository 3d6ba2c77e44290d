"""Implementation of exclusion rules using .gitignore pattern syntax."""

import os
from pathlib import Path, PurePath
from typing import Iterable, List, Optional, Sequence

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError  # type: ignore

from treeclip.exceptions import InvalidPatternError, PatternBuildError
from treeclip.types import PathType

from .base_rules import BaseExclusionRules

IGNORE_FILE_NAME = ".treeclipignore"


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax, anchored at an exclusion root.

    Rules come from two places, in this order: the optional ``.treeclipignore`` file
    found directly in the exclusion root, then patterns supplied programmatically
    (usually from the command line). Matching follows Git: the last rule that matches
    a path decides, so a later ``!pattern`` re-includes something an earlier rule
    excluded, and a command-line pattern can override the ignore-file.

    The supported syntax includes:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-specific patterns (ending in /)
    - Negation patterns (starting with !)
    - Double-asterisk matching (**)
    - Comment lines (starting with #) and blank lines, which are ignored

    Instances are immutable once built and can be shared freely between readers.

    Attributes:
        root (Path): Absolute exclusion root. Paths are matched relative to it.
        ignore_file (Optional[Path]): The ignore-file that was loaded, if any.
        cli_patterns (tuple[str, ...]): Patterns layered after the ignore-file.
        rule_lines (tuple[str, ...]): All rule lines, ignore-file lines first.

    Example:
        >>> rules = GitIgnoreExclusionRules.build("/nonexistent", ["target/", "*.log", "!keep.log"])
        >>> rules.exclude("target/")
        True
        >>> rules.exclude("app.log")
        True
        >>> rules.exclude("keep.log")
        False
    """

    def __init__(
        self,
        root: PathType,
        cli_patterns: Iterable[str] = (),
        ignore_file: Optional[PathType] = None,
        ignore_file_lines: Iterable[str] = (),
    ):
        """Compile rule lines into a matcher.

        Most callers should use build(), which also discovers and reads the ignore-file.

        Args:
            root: The exclusion root. It does not need to exist.
            cli_patterns: Gitignore-style patterns layered after the ignore-file lines.
            ignore_file: The ignore-file ignore_file_lines came from, if any.
            ignore_file_lines: Lines read from the ignore-file, in file order.

        Raises:
            InvalidPatternError: If any line fails to compile.
            PatternBuildError: If the matcher cannot be assembled.
        """
        self.root = Path(os.path.abspath(root))
        self.ignore_file = Path(ignore_file) if ignore_file is not None else None
        self.cli_patterns = tuple(cli_patterns)
        self.rule_lines = tuple(ignore_file_lines) + self.cli_patterns
        self._spec = self._compile(self.rule_lines)

    @classmethod
    def build(cls, root: PathType, cli_patterns: Sequence[str] = ()) -> "GitIgnoreExclusionRules":
        """Build the rules for an exclusion root.

        If ``<root>/.treeclipignore`` exists its lines are added first, in file order,
        followed by each of cli_patterns in the given order.

        Args:
            root: The exclusion root. It does not need to exist.
            cli_patterns: Additional gitignore-style patterns. May be empty.

        Returns:
            GitIgnoreExclusionRules: The compiled rules.

        Raises:
            InvalidPatternError: If any rule line fails to compile. Its index is the
                zero-based position in the combined rule list.
            PatternBuildError: If the ignore-file exists but cannot be read.
        """
        ignore_file = Path(root) / IGNORE_FILE_NAME
        lines: List[str] = []
        loaded: Optional[Path] = None

        if ignore_file.is_file():
            try:
                with open(ignore_file, "r", encoding="utf-8") as f:
                    lines.extend(f.read().splitlines())
            except (OSError, UnicodeDecodeError) as e:
                raise PatternBuildError(f"Failed to read ignore file: {ignore_file}") from e
            loaded = ignore_file

        return cls(root, cli_patterns, ignore_file=loaded, ignore_file_lines=lines)

    @staticmethod
    def _compile(rule_lines: Sequence[str]) -> PathSpec:
        patterns = []
        for index, line in enumerate(rule_lines):
            try:
                patterns.append(GitWildMatchPattern(line))
            except GitWildMatchPatternError as e:
                raise InvalidPatternError(line, index) from e

        try:
            return PathSpec(patterns)
        except (TypeError, ValueError) as e:
            raise PatternBuildError(f"Failed to build exclusion matcher: {e}") from e

    def exclude(self, path: str) -> bool:
        """Check a root-relative, forward-slash path against the rules.

        A trailing slash marks a directory, which lets directory-only patterns match.
        No other normalization is performed.

        Example:
            >>> rules = GitIgnoreExclusionRules("/project", ["build/"])
            >>> rules.exclude("build/")
            True
            >>> rules.exclude("build")
            False
        """
        return bool(self._spec.match_file(path))

    def relative_path(self, path: PathType) -> str:
        """Return path relative to the exclusion root, with forward slashes.

        This is the form shown in record headers. The root itself maps to the empty
        string; paths outside the root keep their absolute form.

        Example:
            >>> rules = GitIgnoreExclusionRules("/project")
            >>> rules.relative_path("/project/src/main.py")
            'src/main.py'
            >>> rules.relative_path("/elsewhere/notes.txt")
            '/elsewhere/notes.txt'
        """
        absolute = Path(os.path.abspath(path))
        try:
            relative = absolute.relative_to(self.root)
        except ValueError:
            return absolute.as_posix()
        if relative == Path("."):
            return ""
        return relative.as_posix()

    def match_path(self, path: PathType) -> str:
        """Return the form of path that patterns are matched against.

        Paths outside the root lose their anchor, so un-anchored patterns such as
        ``*.log`` still apply to them.

        Example:
            >>> rules = GitIgnoreExclusionRules("/project")
            >>> rules.match_path("/project/src/main.py")
            'src/main.py'
            >>> rules.match_path("/elsewhere/notes.txt")
            'elsewhere/notes.txt'
        """
        relative = self.relative_path(path)
        anchor = PurePath(relative).anchor
        if not anchor:
            return relative
        return PurePath(relative).relative_to(anchor).as_posix()
