"""Opening a finished bundle in a text editor."""

import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from treeclip.exceptions import EditorError
from treeclip.types import PathType

FALLBACK_EDITOR = "nano"


def platform_opener() -> Optional[List[str]]:
    """Return the command that opens a file with the desktop's default application.

    Returns None on Windows, where os.startfile() is used instead, and when no
    opener is installed.
    """
    if sys.platform.startswith("win"):
        return None
    if sys.platform == "darwin":
        return ["open"]
    if shutil.which("xdg-open"):
        return ["xdg-open"]
    return None


def terminal_editor() -> str:
    """Return the terminal editor named by $VISUAL or $EDITOR, falling back to nano."""
    return os.environ.get("VISUAL") or os.environ.get("EDITOR") or FALLBACK_EDITOR


def open_in_editor(path: PathType, wait: bool = False) -> None:
    """Open path in the default application, or in a terminal editor if that fails.

    Desktop openers return as soon as the application has been launched, so when the
    caller needs to wait until the file is closed (for example to delete it
    afterwards), the terminal editor is used directly.

    Args:
        path: An existing file.
        wait: Block until the editor has exited.

    Raises:
        EditorError: If no editor could be started or the editor exited with an error.
    """
    target = Path(path).resolve()

    if not wait:
        if sys.platform.startswith("win"):
            try:
                os.startfile(target)  # type: ignore[attr-defined]
                return
            except OSError:
                pass  # fall back to the terminal editor
        else:
            opener = platform_opener()
            if opener is not None:
                try:
                    if subprocess.run([*opener, str(target)]).returncode == 0:
                        return
                except OSError:
                    pass  # fall back to the terminal editor

    editor = terminal_editor()
    try:
        result = subprocess.run([*editor.split(), str(target)])
    except OSError as e:
        raise EditorError(f"Failed to open editor '{editor}' for file: {target}") from e
    if result.returncode != 0:
        raise EditorError(f"Editor process failed with status: {result.returncode}")


def delete_output(path: PathType) -> None:
    """Remove the bundle once it is no longer needed.

    Raises:
        EditorError: If the file cannot be removed.
    """
    try:
        Path(path).unlink()
    except OSError as e:
        raise EditorError(f"Failed to delete file: {path}") from e
