"""Command-line argument parsing for treeclip.

This module defines the command-line interface for treeclip,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Optional

from treeclip import __version__
from treeclip.exclusion_rules.git_rules import IGNORE_FILE_NAME

DEFAULT_OUTPUT_NAME = "treeclip_temp.txt"


def validate_path(value: str) -> Path:
    """Argparse type for path arguments: any non-blank string.

    Raises:
        argparse.ArgumentTypeError: If value is empty or only whitespace.
    """
    if not value.strip():
        raise argparse.ArgumentTypeError("Path cannot be empty")
    return Path(value)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with treeclip's commands and options.
    """
    description = """
    treeclip: bundle your code for AI assistants.

    treeclip walks one or more directories and gathers the contents of every file
    into a single text file, each preceded by a '==> relative/path' header, ready to
    paste into a chat with an AI assistant.
    """

    epilog = f"""
    Examples:
      # Bundle the current directory into {DEFAULT_OUTPUT_NAME} and copy it
      treeclip run --clipboard

      # Bundle specific directories with exclusions
      treeclip run ./src ./docs -e node_modules -e '*.log'

      # Review the bundle in an editor, then remove it
      treeclip run --editor --delete --stats

    Put permanent exclusions in a {IGNORE_FILE_NAME} file (gitignore syntax) in the
    root directory. Patterns given with -e are applied after it.
    """

    parser = argparse.ArgumentParser(
        prog="treeclip",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"treeclip {__version__}", help="Show the version and exit"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    run_parser = subparsers.add_parser(
        "run",
        help="Bundle directory contents into a single file.",
        description="Traverse directories and extract all file contents into a single file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    run_parser.add_argument(
        "inputs",
        nargs="*",
        type=validate_path,
        default=[Path(".")],
        metavar="INPUT",
        help="Directories (or files) to traverse, in order (default: current directory).",
    )
    run_parser.add_argument(
        "-o",
        "--output",
        type=validate_path,
        metavar="FILE",
        help=f"Output file path (default: ./{DEFAULT_OUTPUT_NAME}). A directory gets {DEFAULT_OUTPUT_NAME} inside it.",
    )
    run_parser.add_argument(
        "--root",
        type=validate_path,
        metavar="DIR",
        help=(
            f"Root directory for {IGNORE_FILE_NAME} lookup, pattern matching and the relative paths "
            "shown in headers (default: current directory)."
        ),
    )
    run_parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        metavar="PATTERN",
        help=(
            "Gitignore-style pattern to exclude files and directories, e.g. '*.log', 'target/', "
            "'!keep.txt'. Can be specified multiple times; later patterns take precedence."
        ),
    )
    run_parser.add_argument(
        "-c",
        "--clipboard",
        action="store_true",
        help="Copy the output to the system clipboard (Linux needs xclip, xsel or wl-clipboard).",
    )
    run_parser.add_argument(
        "--stats",
        action="store_true",
        help="Show characters, lines, words and size of the output.",
    )
    run_parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Also count tokens with this model's tokenizer (e.g., gpt-4). Requires --stats.",
    )
    run_parser.add_argument(
        "--editor",
        action="store_true",
        help="Open the output file in the default text editor.",
    )
    run_parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete the output file after the editor is closed. Requires --editor.",
    )
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report each step of the traversal on stderr.",
    )
    run_parser.add_argument(
        "--skip-hidden",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Skip files and directories whose name starts with '.'.",
    )
    run_parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolically linked directories. Linked files are always read.",
    )
    run_parser.add_argument(
        "--tree",
        action="store_true",
        help="Print a tree of the files that were bundled.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.delete and not args.editor:
        raise ValueError("--delete requires --editor to be specified")
    if args.tokenizer and not args.stats:
        raise ValueError("-t/--tokenizer requires --stats to be specified")


def resolve_output(output: Optional[Path], cwd: Path) -> Path:
    """Return the output file for the -o value.

    No value, ``.`` and existing directories all map to the default file name inside
    the respective directory.

    Example:
        >>> resolve_output(None, Path("/work"))
        PosixPath('/work/treeclip_temp.txt')
        >>> resolve_output(Path("out.txt"), Path("/work"))
        PosixPath('out.txt')
    """
    if output is None or output == Path("."):
        return cwd / DEFAULT_OUTPUT_NAME
    if output.is_dir():
        return output / DEFAULT_OUTPUT_NAME
    return output
