"""Structured diagnostics emitted while bundling.

The traversal core never prints. It reports what happens through a sink, which is
any callable accepting a TraversalEvent; the presentation layer decides how, and
whether, to render each event.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional


class EventKind(str, Enum):
    """Kinds of events reported during a traversal.

    Values:
        IGNORE_FILE_LOADED: A .treeclipignore file was found and applied
        CLI_PATTERNS_ADDED: Command-line patterns were layered after the ignore-file
        ROOT_STARTED: Walking of an input root has begun
        HIDDEN_SKIPPED: A hidden entry was left out
        OUTPUT_SKIPPED: The output destination was met during the walk and skipped
        FILE_WRITTEN: A record was written for a file
        ENTRY_INACCESSIBLE: A directory entry could not be accessed and was skipped
        ROOT_EMPTY: An input root yielded no admitted files
    """

    IGNORE_FILE_LOADED = "ignore_file_loaded"
    CLI_PATTERNS_ADDED = "cli_patterns_added"
    ROOT_STARTED = "root_started"
    HIDDEN_SKIPPED = "hidden_skipped"
    OUTPUT_SKIPPED = "output_skipped"
    FILE_WRITTEN = "file_written"
    ENTRY_INACCESSIBLE = "entry_inaccessible"
    ROOT_EMPTY = "root_empty"


WARNING_KINDS = frozenset({EventKind.ENTRY_INACCESSIBLE, EventKind.ROOT_EMPTY})


@dataclass(frozen=True)
class TraversalEvent:
    """A single diagnostic.

    Attributes:
        kind: What happened.
        message: Human-readable description.
        path: The filesystem path involved, if any.
    """

    kind: EventKind
    message: str
    path: Optional[Path] = None

    @property
    def is_warning(self) -> bool:
        """Whether the event reports a soft failure."""
        return self.kind in WARNING_KINDS


EventSink = Callable[[TraversalEvent], None]


def null_sink(event: TraversalEvent) -> None:
    """Discard the event."""
    pass


class CollectingSink:
    """Sink that keeps every event it receives, in order.

    Example:
        >>> sink = CollectingSink()
        >>> sink(TraversalEvent(EventKind.ROOT_EMPTY, "No files found in: docs"))
        >>> [event.kind.value for event in sink.events]
        ['root_empty']
    """

    def __init__(self) -> None:
        self.events: List[TraversalEvent] = []

    def __call__(self, event: TraversalEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> List[TraversalEvent]:
        """Return the collected events of the given kind."""
        return [event for event in self.events if event.kind == kind]

    @property
    def warnings(self) -> List[TraversalEvent]:
        """Return the collected soft-failure events."""
        return [event for event in self.events if event.is_warning]
