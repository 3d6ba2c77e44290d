"""Statistics about a finished bundle.

Counts characters, lines, words and bytes of the bundle text, and optionally tokens
using OpenAI's tiktoken library. Tokenization for models such as gpt-4 uses the
cl100k_base encoding, which gives useful approximations for most modern language
models even when it does not exactly match the target model.
"""

import importlib.util
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from treeclip.exceptions import TokenizationError, TokenizerNotAvailableError
from treeclip.types import PathType

BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

# Upper byte bounds (exclusive) and the remark shown for bundles below them
SIZE_REMARKS = (
    (1024, "🐣", "Tiny but mighty!"),
    (100 * 1024, "🐇", "Perfect size! Easy to handle~"),
    (1024 * 1024, "🐘", "That's a big one! Impressive~"),
)
LARGEST_REMARK = ("🐋", "Whoa! You've got a whale of content!")


def check_tiktoken_available() -> bool:
    """Check if the tiktoken library is available."""
    return importlib.util.find_spec("tiktoken") is not None


def format_number(n: int) -> str:
    """Format an integer with thousands separators.

    Example:
        >>> format_number(1234567)
        '1,234,567'
        >>> format_number(-1000)
        '-1,000'
    """
    return f"{n:,}"


def format_bytes(size: int) -> str:
    """Convert a byte count to a human-readable string using 1024-based units.

    Example:
        >>> format_bytes(0)
        '0 B'
        >>> format_bytes(1023)
        '1023 B'
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(1048576)
        '1.0 MB'
    """
    if size <= 0:
        return "0 B"

    exponent = min(int(math.floor(math.log(size, 1024))), len(BYTE_UNITS) - 1)
    # Guard against floating point error just below a unit boundary
    if exponent < len(BYTE_UNITS) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1
    if exponent == 0:
        return f"{size} {BYTE_UNITS[0]}"
    return f"{size / 1024 ** exponent:.1f} {BYTE_UNITS[exponent]}"


def size_remark(size: int) -> Tuple[str, str]:
    """Return an emoji and a remark describing a bundle of the given byte size.

    Example:
        >>> size_remark(10)
        ('🐣', 'Tiny but mighty!')
    """
    for bound, emoji, remark in SIZE_REMARKS:
        if size < bound:
            return emoji, remark
    return LARGEST_REMARK


@dataclass(frozen=True)
class ContentStats:
    """Counts describing a bundle.

    Attributes:
        characters: Number of characters.
        lines: Number of newline-separated lines.
        words: Number of whitespace-separated words.
        bytes: Size of the UTF-8 encoding.
        tokens: Number of tokens, or None if token counting was not requested.
    """

    characters: int
    lines: int
    words: int
    bytes: int
    tokens: Optional[int] = None

    def render(self) -> str:
        """Render the counts as a small report."""
        rows = [
            ("Characters", format_number(self.characters)),
            ("Lines", format_number(self.lines)),
            ("Words", format_number(self.words)),
            ("Size", format_bytes(self.bytes)),
        ]
        if self.tokens is not None:
            rows.insert(3, ("Tokens", format_number(self.tokens)))
        return "\n".join(f"{label + ':':<12}{value:>15}" for label, value in rows)


class StatsCounter:
    """Computes ContentStats for text, optionally counting tokens with tiktoken.

    Token counting requires both the tiktoken library to be installed and a model to be
    specified. Without a model, the counter still works and reports tokens as None.

    Attributes:
        model (Optional[str]): Model whose tokenizer to use, or None to disable token counting.
        encoder (Optional[Any]): The tiktoken encoder if token counting is enabled.

    Example:
        >>> counter = StatsCounter()
        >>> stats = counter.count("==> a.txt\\nhello world\\n")
        >>> stats.lines, stats.words, stats.tokens
        (3, 4, None)

    Raises:
        ValueError: If the specified model's tokenizer cannot be loaded.
        TokenizerNotAvailableError: If a model is given but tiktoken is not installed.
    """

    def __init__(self, model: Optional[str] = None):
        self.model = model
        self.encoder: Optional[Any] = None

        if self.model is not None:
            if not check_tiktoken_available():
                raise TokenizerNotAvailableError()
            self.encoder = self._get_encoder(self.model)

    @staticmethod
    def _get_encoder(model: str) -> Any:
        # Imported lazily: tiktoken is an optional dependency
        import tiktoken

        try:
            return tiktoken.encoding_for_model(model)
        except KeyError:
            raise ValueError(
                f"Could not load tokenizer for model '{model}'. Consider using a "
                "well-supported model like 'gpt-4' (cl100k_base encoding) for token counting. "
                "While token counts may not exactly match your target model, they can provide "
                "useful approximations."
            )

    def count(self, text: str) -> ContentStats:
        """Count the given text.

        Lines are counted as the number of newline-separated segments, so text ending
        in a newline counts one trailing empty line.

        Raises:
            TokenizationError: If token counting is enabled but fails.
        """
        tokens = None
        if self.encoder is not None:
            try:
                tokens = len(self.encoder.encode(text))
            except Exception as e:
                raise TokenizationError(f"Failed to tokenize text: {str(e)}")

        return ContentStats(
            characters=len(text),
            lines=len(text.split("\n")),
            words=len(text.split()),
            bytes=len(text.encode("utf-8")),
            tokens=tokens,
        )

    def count_file(self, path: PathType) -> ContentStats:
        """Count the contents of a UTF-8 text file, such as a finished bundle.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
            TokenizationError: If token counting is enabled but fails.
        """
        with open(Path(path), "r", encoding="utf-8", newline="") as f:
            return self.count(f.read())
