"""Value objects describing one bundling run and its result."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Tuple

from treeclip.types import PathType

from .manifest import Manifest


@dataclass(frozen=True)
class TraversalRequest:
    """Immutable description of a bundling run.

    Attributes:
        inputs: Input roots, walked in this order. Must not be empty.
        output: The single output destination.
        root: Exclusion root. Ignore-file discovery, pattern matching and the
            relative paths shown in record headers are all resolved against it.
        patterns: Extra gitignore-style patterns, layered after the ignore-file.
        skip_hidden: Leave out entries whose name starts with a dot.
        follow_symlinks: Descend into symlinked directories.

    Example:
        >>> request = TraversalRequest.create(["src"], "out.txt", root=".", patterns=["*.log"])
        >>> request.inputs
        (PosixPath('src'),)
    """

    inputs: Tuple[Path, ...]
    output: Path
    root: Path
    patterns: Tuple[str, ...] = ()
    skip_hidden: bool = True
    follow_symlinks: bool = False

    def __post_init__(self) -> None:
        if not self.inputs:
            raise ValueError("At least one input path must be provided")

    @classmethod
    def create(
        cls,
        inputs: Sequence[PathType],
        output: PathType,
        *,
        root: Optional[PathType] = None,
        patterns: Sequence[str] = (),
        skip_hidden: bool = True,
        follow_symlinks: bool = False,
    ) -> "TraversalRequest":
        """Build a request from loosely typed values.

        Args:
            inputs: Input roots. Any path-like objects.
            output: Output destination.
            root: Exclusion root. Defaults to the current directory.
            patterns: Extra exclusion patterns.
            skip_hidden: Leave out hidden entries. Defaults to True.
            follow_symlinks: Descend into symlinked directories. Defaults to False.

        Raises:
            ValueError: If inputs is empty.
        """
        return cls(
            inputs=tuple(Path(p) for p in inputs),
            output=Path(output),
            root=Path(root) if root is not None else Path.cwd(),
            patterns=tuple(patterns),
            skip_hidden=skip_hidden,
            follow_symlinks=follow_symlinks,
        )


@dataclass
class TraversalOutcome:
    """Result of a successful run.

    Attributes:
        output: Where the bundle was written.
        files_written: Records written across all input roots.
        roots_with_files: Input roots that contributed at least one record.
        empty_roots: Input roots that contributed nothing.
        manifest: Tree of the files written, keyed by their header paths.
    """

    output: Path
    files_written: int = 0
    roots_with_files: Tuple[Path, ...] = ()
    empty_roots: Tuple[Path, ...] = ()
    manifest: Manifest = field(default_factory=Manifest)
