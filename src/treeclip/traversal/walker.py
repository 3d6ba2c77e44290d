"""Traversal engine: walks input roots and streams admitted files into one bundle.

The engine is single-threaded and synchronous. For each input root, in order, it
walks depth-first in directory enumeration order (no sorting is applied), consults
the EntryFilter for every entry, reads each admitted file in full and hands it to
the BundleWriter before moving on.
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Set

from treeclip.exceptions import ContentReadError, NoFilesFoundError, PathNotFoundError
from treeclip.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treeclip.types import EntryKind

from .entry_filter import EntryFilter
from .events import EventKind, EventSink, TraversalEvent, null_sink
from .file_identifier import FileIdentifier
from .manifest import Manifest
from .output_writer import BundleWriter
from .request import TraversalOutcome, TraversalRequest


class TraversalEngine:
    """Orchestrates one bundling run.

    Failure policy:
        - A missing input root aborts before anything is written (PathNotFoundError).
        - A pattern that fails to compile aborts before anything is written
          (InvalidPatternError / PatternBuildError).
        - A directory entry that cannot be accessed is skipped and reported as an
          ENTRY_INACCESSIBLE event.
        - An admitted file that cannot be read as UTF-8 text aborts the run
          (ContentReadError).
        - An input root yielding no files is reported as a ROOT_EMPTY event; only
          when every root is empty does the run fail (NoFilesFoundError).
        - Output failures abort immediately (OutputWriteError).

    The output destination is recognized by device and inode whenever the walk
    comes across it, and is never read back into the bundle.

    Attributes:
        request (TraversalRequest): What to bundle and where.

    Example:
        >>> request = TraversalRequest.create(["src"], "bundle.txt")  # doctest: +SKIP
        >>> outcome = TraversalEngine(request).run()  # doctest: +SKIP
        >>> outcome.files_written  # doctest: +SKIP
        12
    """

    def __init__(self, request: TraversalRequest, sink: EventSink = null_sink) -> None:
        """Initialize the engine.

        Args:
            request: The run to perform.
            sink: Receives diagnostic events. Defaults to discarding them.
        """
        self.request = request
        self._sink = sink

    def run(self) -> TraversalOutcome:
        """Perform the run.

        Returns:
            TraversalOutcome: Aggregate counts and the manifest of written files.

        Raises:
            PathNotFoundError: If an input root does not exist.
            InvalidPatternError: If an exclusion pattern fails to compile.
            PatternBuildError: If the exclusion rules cannot be built otherwise.
            OutputWriteError: If the output destination cannot be written.
            ContentReadError: If an admitted file cannot be read.
            NoFilesFoundError: If no input root yielded any file.
        """
        request = self.request
        for input_path in request.inputs:
            if not input_path.exists():
                raise PathNotFoundError(input_path)

        rules = GitIgnoreExclusionRules.build(request.root, request.patterns)
        self._report_rules(rules)
        entry_filter = EntryFilter(rules, skip_hidden=request.skip_hidden, sink=self._sink)

        manifest = Manifest(rules.root.name or rules.root.as_posix())
        roots_with_files: List[Path] = []
        empty_roots: List[Path] = []

        with BundleWriter(request.output) as writer:
            for input_path in request.inputs:
                self._emit(EventKind.ROOT_STARTED, f"Traversing: {input_path}", input_path)
                written_before = writer.records_written

                for file_path in self._walk_root(input_path, entry_filter, writer):
                    relative = rules.relative_path(file_path)
                    writer.write_record(relative, self._read(file_path))
                    manifest.add(relative)
                    self._emit(EventKind.FILE_WRITTEN, f"Added: {relative}", file_path)

                if writer.records_written == written_before:
                    empty_roots.append(input_path)
                    self._emit(EventKind.ROOT_EMPTY, f"No files found in directory: {input_path}", input_path)
                else:
                    roots_with_files.append(input_path)

            files_written = writer.records_written

        if not roots_with_files:
            raise NoFilesFoundError(empty_roots)

        return TraversalOutcome(
            output=request.output,
            files_written=files_written,
            roots_with_files=tuple(roots_with_files),
            empty_roots=tuple(empty_roots),
            manifest=manifest,
        )

    def _emit(self, kind: EventKind, message: str, path: Optional[Path] = None) -> None:
        self._sink(TraversalEvent(kind, message, path))

    def _report_rules(self, rules: GitIgnoreExclusionRules) -> None:
        if rules.ignore_file is not None:
            self._emit(EventKind.IGNORE_FILE_LOADED, f"Found ignore file: {rules.ignore_file}", rules.ignore_file)
        if rules.cli_patterns:
            self._emit(EventKind.CLI_PATTERNS_ADDED, f"Adding exclusion patterns: {', '.join(rules.cli_patterns)}")

    def _walk_root(self, input_path: Path, entry_filter: EntryFilter, writer: BundleWriter) -> Iterator[Path]:
        """Yield admitted files beneath an input root.

        The root goes through the filter like any other entry, so an excluded or
        hidden root yields nothing. A root that is a file yields itself.
        """
        is_dir = input_path.is_dir()
        if not entry_filter.admit(input_path, is_dir):
            return
        if is_dir:
            yield from self._walk_dir(input_path, entry_filter, writer, set())
        elif self._is_output(input_path, writer):
            return
        else:
            yield input_path

    def _walk_dir(
        self,
        directory: Path,
        entry_filter: EntryFilter,
        writer: BundleWriter,
        visited: Set[FileIdentifier],
    ) -> Iterator[Path]:
        # Directories on the current branch, for symlink loop detection
        dir_id = FileIdentifier.of(directory)
        if dir_id is not None:
            if dir_id in visited:
                return
            visited.add(dir_id)

        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            self._emit(EventKind.ENTRY_INACCESSIBLE, f"Cannot access directory {directory}: {e.strerror}", directory)
            entries = []

        for entry in entries:
            path = Path(entry.path)
            try:
                kind = self._classify(entry)
            except OSError as e:
                self._emit(EventKind.ENTRY_INACCESSIBLE, f"Cannot access {path}: {e.strerror}", path)
                continue

            # Unfollowed symlinks to directories, broken links and special files
            if kind is None or kind is EntryKind.SYMLINK:
                continue

            is_dir = kind is EntryKind.DIRECTORY
            if not entry_filter.admit(path, is_dir):
                continue

            if is_dir:
                yield from self._walk_dir(path, entry_filter, writer, visited)
            elif self._is_output(path, writer):
                continue
            else:
                yield path

        if dir_id is not None:
            visited.discard(dir_id)

    def _classify(self, entry: "os.DirEntry[str]") -> Optional[EntryKind]:
        """Classify a directory entry, following file symlinks.

        Raises:
            OSError: If the entry cannot be inspected.
        """
        if entry.is_symlink():
            if entry.is_dir():
                return EntryKind.DIRECTORY if self.request.follow_symlinks else EntryKind.SYMLINK
            if entry.is_file():
                return EntryKind.FILE
            return EntryKind.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return EntryKind.FILE
        return None

    def _is_output(self, path: Path, writer: BundleWriter) -> bool:
        if writer.is_destination(FileIdentifier.of(path)):
            self._emit(EventKind.OUTPUT_SKIPPED, f"Skipping output file: {path}", path)
            return True
        return False

    @staticmethod
    def _read(path: Path) -> str:
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except UnicodeDecodeError as e:
            raise ContentReadError(path, "not valid UTF-8 text") from e
        except OSError as e:
            raise ContentReadError(path, e.strerror) from e


def run(request: TraversalRequest, sink: EventSink = null_sink) -> TraversalOutcome:
    """Bundle the files described by request. See TraversalEngine.run()."""
    return TraversalEngine(request, sink).run()
