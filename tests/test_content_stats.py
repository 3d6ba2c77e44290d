import sys
from unittest.mock import MagicMock, patch

import pytest

from treeclip.content_stats import (
    ContentStats,
    StatsCounter,
    check_tiktoken_available,
    format_bytes,
    format_number,
    size_remark,
)
from treeclip.exceptions import TokenizationError, TokenizerNotAvailableError


@pytest.fixture
def mock_tiktoken_available():
    with patch("importlib.util.find_spec", return_value=True):
        yield


@pytest.fixture
def mock_tiktoken_unavailable():
    with patch("importlib.util.find_spec", return_value=None):
        yield


@pytest.fixture
def mock_encoder():
    encoder = MagicMock()
    encoder.encode.side_effect = lambda text: [0] * len(text.split())  # One token per word
    return encoder


def test_check_tiktoken_available(mock_tiktoken_available):
    assert check_tiktoken_available() is True


def test_check_tiktoken_unavailable(mock_tiktoken_unavailable):
    assert check_tiktoken_available() is False


@pytest.mark.parametrize(
    "n,expected",
    [(0, "0"), (999, "999"), (1000, "1,000"), (1234567, "1,234,567"), (-1000, "-1,000")],
)
def test_format_number(n, expected):
    assert format_number(n) == expected


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 B"),
        (1, "1 B"),
        (1023, "1023 B"),
        (1024, "1.0 KB"),
        (1536, "1.5 KB"),
        (1024 * 1024, "1.0 MB"),
        (5 * 1024**3, "5.0 GB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


@pytest.mark.parametrize(
    "size,emoji",
    [(0, "🐣"), (1023, "🐣"), (1024, "🐇"), (100 * 1024, "🐘"), (1024 * 1024, "🐋"), (10**9, "🐋")],
)
def test_size_remark(size, emoji):
    assert size_remark(size)[0] == emoji


def test_count_without_model(mock_tiktoken_unavailable):
    counter = StatsCounter()
    assert counter.encoder is None

    stats = counter.count("==> a.txt\nhello wörld\n")
    assert stats == ContentStats(characters=22, lines=3, words=4, bytes=23, tokens=None)


def test_count_empty_text():
    stats = StatsCounter().count("")
    assert stats.characters == 0
    assert stats.lines == 1
    assert stats.words == 0
    assert stats.bytes == 0


def test_count_with_model(mock_tiktoken_available, mock_encoder):
    with patch.object(StatsCounter, "_get_encoder", return_value=mock_encoder):
        counter = StatsCounter(model="gpt-4")
        stats = counter.count("one two three")

    assert counter.encoder is mock_encoder
    assert stats.tokens == 3
    mock_encoder.encode.assert_called_once_with("one two three")


def test_model_requires_tiktoken(mock_tiktoken_unavailable):
    with pytest.raises(TokenizerNotAvailableError):
        StatsCounter(model="gpt-4")


def test_unknown_model(mock_tiktoken_available):
    fake_tiktoken = MagicMock()
    fake_tiktoken.encoding_for_model.side_effect = KeyError("no-such-model")
    with patch.dict(sys.modules, {"tiktoken": fake_tiktoken}):
        with pytest.raises(ValueError, match="Could not load tokenizer for model 'no-such-model'"):
            StatsCounter(model="no-such-model")


def test_tokenization_error(mock_tiktoken_available):
    encoder = MagicMock()
    encoder.encode.side_effect = RuntimeError("Encoding failed")
    with patch.object(StatsCounter, "_get_encoder", return_value=encoder):
        counter = StatsCounter(model="gpt-4")

    with pytest.raises(TokenizationError, match="Encoding failed"):
        counter.count("text")


def test_count_file(tmp_path):
    bundle = tmp_path / "bundle.txt"
    bundle.write_bytes(b"==> a.txt\r\nhello\n")

    stats = StatsCounter().count_file(bundle)

    # Line endings are read untranslated
    assert stats.characters == 17
    assert stats.lines == 3


def test_render():
    report = ContentStats(characters=1234, lines=10, words=200, bytes=2048).render()
    lines = report.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("Characters:")
    assert lines[0].endswith("1,234")
    assert lines[3].endswith("2.0 KB")
    assert "Tokens" not in report


def test_render_with_tokens():
    report = ContentStats(characters=1, lines=1, words=1, bytes=1, tokens=4567).render()
    assert [line.split(":")[0] for line in report.splitlines()] == ["Characters", "Lines", "Words", "Tokens", "Size"]
    assert "4,567" in report
