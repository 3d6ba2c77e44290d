"""Command-line interface for treeclip.

This module provides the command-line entry point. It turns parsed arguments into a
TraversalRequest, renders the engine's diagnostic events, and then hands the finished
bundle to the optional collaborators: manifest tree, clipboard, statistics and editor.

Diagnostics go to stderr; results (tree, statistics, summary) go to stdout.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    3: No files matched in any input
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Bundle the current directory and copy the result
    $ treeclip run --clipboard

    # Bundle two directories, excluding build output
    $ treeclip run src tests -e 'build/' -o bundle.txt
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from treeclip.cli.argparser import create_parser, resolve_output, validate_args
from treeclip.clipboard import copy_to_clipboard
from treeclip.content_stats import StatsCounter, size_remark
from treeclip.editor import delete_output, open_in_editor
from treeclip.exceptions import NoFilesFoundError, TokenizerNotAvailableError, TreeClipError
from treeclip.traversal.events import TraversalEvent
from treeclip.traversal.request import TraversalOutcome, TraversalRequest
from treeclip.traversal.walker import run

EXIT_RUNTIME_ERROR = 1
EXIT_NO_FILES = 3
EXIT_PERMISSION_DENIED = 126
EXIT_INTERRUPTED = 130


class ConsoleSink:
    """Renders traversal events on a text stream.

    Warnings are always shown, prefixed with ``Warning:``. Other events are shown
    only in verbose mode.

    Attributes:
        verbose (bool): Whether informational events are shown.
    """

    def __init__(self, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        self.verbose = verbose
        self._stream = stream

    def __call__(self, event: TraversalEvent) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        if event.is_warning:
            print(f"Warning: {event.message}", file=stream)
        elif self.verbose:
            print(event.message, file=stream)


def build_request(args: argparse.Namespace, cwd: Optional[Path] = None) -> TraversalRequest:
    """Translate parsed arguments into a TraversalRequest.

    Args:
        args: Arguments from the ``run`` sub-command.
        cwd: Directory that defaults are resolved against. Defaults to the current directory.
    """
    cwd = cwd if cwd is not None else Path.cwd()
    return TraversalRequest.create(
        args.inputs,
        resolve_output(args.output, cwd),
        root=args.root if args.root is not None else cwd,
        patterns=args.exclude or [],
        skip_hidden=args.skip_hidden,
        follow_symlinks=args.follow_symlinks,
    )


def report_outcome(outcome: TraversalOutcome, args: argparse.Namespace, counter: Optional[StatsCounter]) -> None:
    """Print the summary and run the collaborators requested on the command line."""
    print(f"Collected {outcome.files_written} files into {outcome.output}")

    if args.tree:
        print(outcome.manifest.get_tree_representation())

    if args.clipboard:
        copied = copy_to_clipboard(outcome.output)
        print(f"Copied {copied} characters to the clipboard")

    if counter is not None:
        stats = counter.count_file(outcome.output)
        emoji, remark = size_remark(stats.bytes)
        print(stats.render())
        print(f"  {emoji} {remark}")

    if args.editor:
        open_in_editor(outcome.output, wait=args.delete)
        if args.delete:
            delete_output(outcome.output)
            print(f"Deleted {outcome.output}")


def _is_permission_error(error: BaseException) -> bool:
    cause = error.__cause__
    return isinstance(error, PermissionError) or isinstance(cause, PermissionError)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the treeclip command-line interface.

    Args:
        argv: Arguments to parse. Defaults to sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        3: No files matched in any input
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        validate_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        counter = StatsCounter(args.tokenizer) if args.stats else None
        request = build_request(args)
        outcome = run(request, ConsoleSink(verbose=args.verbose))
        report_outcome(outcome, args, counter)
    except KeyboardInterrupt:
        sys.exit(EXIT_INTERRUPTED)
    except TokenizerNotAvailableError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("To enable token counting, install treeclip with the 'token_counting' extra:", file=sys.stderr)
        print('    pip install "treeclip[token_counting]"', file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)
    except NoFilesFoundError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        print("Nothing to bundle. Check your input paths and exclusion patterns.", file=sys.stderr)
        sys.exit(EXIT_NO_FILES)
    except TreeClipError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION_DENIED if _is_permission_error(e) else EXIT_RUNTIME_ERROR)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)


if __name__ == "__main__":
    main()
