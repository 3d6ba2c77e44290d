"""Copying a finished bundle to the system clipboard."""

from pathlib import Path

import pyperclip

from treeclip.exceptions import ClipboardError
from treeclip.types import PathType


def copy_to_clipboard(path: PathType) -> int:
    """Copy the text of the bundle at path to the system clipboard.

    On Linux this needs xclip, xsel or wl-clipboard to be installed; pyperclip picks
    whichever is available.

    Args:
        path: A readable UTF-8 text file.

    Returns:
        int: Number of characters copied.

    Raises:
        ClipboardError: If the file cannot be read or no clipboard mechanism is available.
    """
    try:
        with open(Path(path), "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ClipboardError(f"Failed to read file for clipboard: {path}") from e

    try:
        pyperclip.copy(content)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"Failed to set clipboard content: {e}") from e
    return len(content)
