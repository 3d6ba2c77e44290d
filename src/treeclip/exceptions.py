"""Exception hierarchy for treeclip.

Every failure the traversal core can report is a subclass of TreeClipError, so
callers can branch on the exception type instead of inspecting message text.
"""

from pathlib import Path
from typing import Optional, Sequence

from treeclip.types import PathType


class TreeClipError(Exception):
    """Base class for all treeclip errors."""

    pass


class PatternError(TreeClipError):
    """Raised when exclusion rules cannot be compiled."""

    pass


class InvalidPatternError(PatternError):
    """
    Exception raised when a single exclusion pattern fails to compile.

    Attributes:
        pattern (str): The offending pattern line.
        index (int): Zero-based position of the pattern in the combined rule list
            (ignore-file lines first, then command-line patterns).

    Example:
        >>> error = InvalidPatternError("!", 3)
        >>> str(error)
        "Invalid exclusion pattern '!' at position 3"
    """

    def __init__(self, pattern: str, index: int) -> None:
        self.pattern = pattern
        self.index = index
        super().__init__(f"Invalid exclusion pattern '{pattern}' at position {index}")


class PatternBuildError(PatternError):
    """Raised when the exclusion matcher cannot be built for a reason other than a bad pattern."""

    pass


class TraversalError(TreeClipError):
    """Base class for errors raised while bundling a directory tree."""

    pass


class PathNotFoundError(TraversalError):
    """
    Exception raised when an input root does not exist.

    Attributes:
        path (Path): The missing input root.

    Example:
        >>> str(PathNotFoundError("/no/such/dir"))
        'Path does not exist: /no/such/dir'
    """

    def __init__(self, path: PathType) -> None:
        self.path = Path(path)
        super().__init__(f"Path does not exist: {path}")


class NoFilesFoundError(TraversalError):
    """
    Exception raised when no input root yielded a single admitted file.

    Attributes:
        roots (tuple[Path, ...]): The input roots that produced nothing.

    Example:
        >>> str(NoFilesFoundError(["src", "docs"]))
        'No files found in: src, docs'
    """

    def __init__(self, roots: Sequence[PathType]) -> None:
        self.roots = tuple(Path(root) for root in roots)
        super().__init__(f"No files found in: {', '.join(str(root) for root in roots)}")


class ContentReadError(TraversalError):
    """
    Exception raised when an admitted file cannot be read as UTF-8 text.

    The whole run is aborted, since a record header without its content would
    mislead whoever reads the bundle.

    Attributes:
        path (Path): The file that could not be read.
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        self.path = Path(path)
        message = f"Failed to read file contents from: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class OutputWriteError(TraversalError):
    """
    Exception raised when the output destination cannot be created or written.

    Attributes:
        path (Path): The output destination.
    """

    def __init__(self, path: PathType, reason: Optional[str] = None) -> None:
        self.path = Path(path)
        message = f"Failed to write output file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ClipboardError(TreeClipError):
    """Raised when the bundle cannot be copied to the system clipboard."""

    pass


class EditorError(TreeClipError):
    """Raised when no editor could be launched for the bundle, or the editor failed."""

    pass


class TokenizerNotAvailableError(TreeClipError):
    """
    Exception raised when token counting is requested without the optional tokenizer package.

    The tiktoken package is an optional dependency that must be explicitly installed
    using the 'token_counting' extra.

    Example:
        >>> error = TokenizerNotAvailableError()
        >>> str(error).startswith('Tokenizer (tiktoken) is not installed')
        True
    """

    def __init__(self, message: str = "Tokenizer (tiktoken) is not installed.") -> None:
        self.message = (
            f"{message} To enable token counting, install treeclip with the 'token_counting' "
            "extra: 'pip install treeclip[token_counting]'."
        )
        super().__init__(self.message)


class TokenizationError(TreeClipError):
    """Raised when the tokenizer is available but fails to process the bundle text."""

    pass
