"""Unit tests for the entry filter."""

import pytest

from treeclip.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treeclip.traversal.entry_filter import EntryFilter, admit, is_hidden
from treeclip.traversal.events import CollectingSink, EventKind


@pytest.mark.parametrize(
    "path,expected",
    [
        (".env", True),
        ("project/.git", True),
        ("project/.git/", True),
        ("project/src", False),
        ("project/file.txt", False),
        ("project/.hidden/visible.txt", False),
    ],
)
def test_is_hidden(path, expected):
    assert is_hidden(path) == expected


def test_admit_excluded_entry(project_dir):
    rules = GitIgnoreExclusionRules.build(project_dir, ["target/", "*.log"])
    assert not admit(project_dir / "target", True, rules, skip_hidden=False)
    assert not admit(project_dir / "logs" / "run.log", False, rules, skip_hidden=False)
    assert admit(project_dir / "logs", True, rules, skip_hidden=False)
    assert admit(project_dir / "src" / "main.py", False, rules, skip_hidden=False)


def test_admit_hidden_entry(project_dir):
    rules = GitIgnoreExclusionRules.build(project_dir)
    assert not admit(project_dir / ".env", False, rules, skip_hidden=True)
    assert not admit(project_dir / ".git", True, rules, skip_hidden=True)
    assert admit(project_dir / ".env", False, rules, skip_hidden=False)
    assert admit(project_dir / ".git", True, rules, skip_hidden=False)


def test_negated_hidden_entry_still_skipped(project_dir):
    rules = GitIgnoreExclusionRules.build(project_dir, ["*", "!.env"])
    assert not admit(project_dir / ".env", False, rules, skip_hidden=True)
    assert admit(project_dir / ".env", False, rules, skip_hidden=False)


def test_entry_filter_reports_hidden_skips(project_dir):
    sink = CollectingSink()
    entry_filter = EntryFilter(GitIgnoreExclusionRules.build(project_dir, [".git/"]), skip_hidden=True, sink=sink)

    assert not entry_filter.admit(project_dir / ".env", False)
    # Excluded by a pattern: no hidden-entry report
    assert not entry_filter.admit(project_dir / ".git", True)
    assert entry_filter.admit(project_dir / "README.md", False)

    hidden = sink.of_kind(EventKind.HIDDEN_SKIPPED)
    assert [event.path for event in hidden] == [project_dir / ".env"]
    assert not hidden[0].is_warning


def test_entry_filter_without_hidden_skipping(project_dir):
    sink = CollectingSink()
    entry_filter = EntryFilter(GitIgnoreExclusionRules.build(project_dir), skip_hidden=False, sink=sink)
    assert entry_filter.admit(project_dir / ".env", False)
    assert sink.events == []


def test_is_hidden_resolves_relative_names(tmp_path, monkeypatch):
    (tmp_path / ".config" / "app").mkdir(parents=True)
    monkeypatch.chdir(tmp_path / ".config" / "app")
    assert not is_hidden(".")
    assert is_hidden("..")


def test_admit_agrees_with_entry_filter(project_dir):
    rules = GitIgnoreExclusionRules.build(project_dir, ["target/"])
    entry_filter = EntryFilter(rules, skip_hidden=True)
    entries = [(project_dir / ".env", False), (project_dir / "target", True), (project_dir / "README.md", False)]
    for path, is_dir in entries:
        assert admit(path, is_dir, rules, skip_hidden=True) == entry_filter.admit(path, is_dir)
