"""Unit tests for FileIdentifier."""

import os

from treeclip.traversal.file_identifier import FileIdentifier


def test_equality_and_hash():
    first = FileIdentifier(1, 42)
    assert first == FileIdentifier(1, 42)
    assert first != FileIdentifier(2, 42)
    assert first != (1, 42)
    assert len({first, FileIdentifier(1, 42), FileIdentifier(1, 43)}) == 2


def test_repr():
    assert repr(FileIdentifier(1, 2)) == "FileIdentifier(device_id=1, inode_number=2)"


def test_of_existing_path(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("content")
    stat_info = os.stat(target)
    assert FileIdentifier.of(target) == FileIdentifier(stat_info.st_dev, stat_info.st_ino)


def test_of_same_file_through_different_spellings(tmp_path, monkeypatch):
    (tmp_path / "sub").mkdir()
    target = tmp_path / "file.txt"
    target.write_text("content")
    monkeypatch.chdir(tmp_path / "sub")
    assert FileIdentifier.of("../file.txt") == FileIdentifier.of(target)


def test_of_missing_path(tmp_path):
    assert FileIdentifier.of(tmp_path / "missing") is None
