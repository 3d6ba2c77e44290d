"""Directory traversal and bundle extraction."""

from .entry_filter import EntryFilter, admit, is_hidden
from .events import CollectingSink, EventKind, TraversalEvent
from .output_writer import BundleWriter
from .request import TraversalOutcome, TraversalRequest
from .walker import TraversalEngine, run

__all__ = [
    "BundleWriter",
    "CollectingSink",
    "EntryFilter",
    "EventKind",
    "TraversalEngine",
    "TraversalEvent",
    "TraversalOutcome",
    "TraversalRequest",
    "admit",
    "is_hidden",
    "run",
]
