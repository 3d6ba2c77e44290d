"""Writer owning the single output destination of a bundling run."""

import os
import types
from pathlib import Path
from typing import Optional, TextIO, Type

from treeclip.exceptions import OutputWriteError
from treeclip.types import PathType

from .file_identifier import FileIdentifier

HEADER_PREFIX = "==> "


def format_record(relative_path: str, content: str, first: bool = True) -> str:
    """Format one record of a bundle.

    A record is a ``==> <path>`` header line followed by the content with trailing
    whitespace removed and exactly one newline. Records after the first are preceded
    by a single blank line.

    Example:
        >>> format_record("a.txt", "hello\\n\\n")
        '==> a.txt\\nhello\\n'
        >>> format_record("b/c.txt", "world", first=False)
        '\\n==> b/c.txt\\nworld\\n'
    """
    separator = "" if first else "\n"
    return f"{separator}{HEADER_PREFIX}{relative_path}\n{content.rstrip()}\n"


class BundleWriter:
    """Streams records into the output destination.

    The destination is created or truncated when the writer is opened, never appended
    to, and each record is written as soon as it is handed over. Output is UTF-8 with
    ``\\n`` line endings.

    Attributes:
        path (Path): The output destination.
        identity (Optional[FileIdentifier]): Device and inode of the destination once
            opened, used to recognize it if the walk comes across it.

    Example:
        >>> import tempfile, os
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     out = os.path.join(tmpdir, "bundle.txt")
        ...     with BundleWriter(out) as writer:
        ...         writer.write_record("a.txt", "hello")
        ...         writer.write_record("b/c.txt", "world\\n")
        ...     with open(out) as f:
        ...         f.read()
        '==> a.txt\\nhello\\n\\n==> b/c.txt\\nworld\\n'
    """

    def __init__(self, path: PathType):
        self.path = Path(path)
        self.identity: Optional[FileIdentifier] = None
        self._file: Optional[TextIO] = None
        self._records_written = 0
        self._closed = False

    @property
    def records_written(self) -> int:
        """Number of records written so far."""
        return self._records_written

    def open(self) -> None:
        """Create or truncate the destination.

        Raises:
            OutputWriteError: If the destination cannot be opened for writing.
        """
        try:
            self._file = open(self.path, "w", encoding="utf-8", newline="")
            stat_info = os.fstat(self._file.fileno())
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror) from e
        self.identity = FileIdentifier(stat_info.st_dev, stat_info.st_ino)

    def is_destination(self, identifier: Optional[FileIdentifier]) -> bool:
        """Check whether identifier refers to the destination itself."""
        return identifier is not None and identifier == self.identity

    def write_record(self, relative_path: str, content: str) -> None:
        """Write one record.

        Args:
            relative_path: Path shown in the header, with forward slashes.
            content: The file's full text.

        Raises:
            ValueError: If the writer is not open.
            OutputWriteError: If writing fails.
        """
        if self._file is None or self._closed:
            raise ValueError("Cannot write to a BundleWriter that is not open")

        record = format_record(relative_path, content, first=self._records_written == 0)
        try:
            self._file.write(record)
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror) from e
        self._records_written += 1

    def close(self) -> None:
        """Flush and close the destination.

        Raises:
            OutputWriteError: If the final flush fails.
        """
        if self._closed or self._file is None:
            self._closed = True
            return

        try:
            self._file.close()
        except OSError as e:
            raise OutputWriteError(self.path, e.strerror) from e
        finally:
            self._closed = True

    def __enter__(self) -> "BundleWriter":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the destination, letting an exception from the block take priority."""
        try:
            self.close()
        except OutputWriteError:
            if exc_type is None:
                raise
