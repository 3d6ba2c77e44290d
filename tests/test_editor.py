from unittest.mock import MagicMock, patch

import pytest

from treeclip.editor import FALLBACK_EDITOR, delete_output, open_in_editor, platform_opener, terminal_editor
from treeclip.exceptions import EditorError


@pytest.fixture
def bundle(tmp_path):
    path = tmp_path / "bundle.txt"
    path.write_text("==> a.txt\nhello\n")
    return path


@pytest.fixture
def editor_env(monkeypatch):
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.setenv("EDITOR", "vim -u NONE")


def test_terminal_editor_prefers_visual(monkeypatch):
    monkeypatch.setenv("VISUAL", "emacs")
    monkeypatch.setenv("EDITOR", "vim")
    assert terminal_editor() == "emacs"


def test_terminal_editor_fallback(monkeypatch):
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)
    assert terminal_editor() == FALLBACK_EDITOR


@pytest.mark.parametrize(
    "platform,which,expected",
    [
        ("darwin", None, ["open"]),
        ("linux", "/usr/bin/xdg-open", ["xdg-open"]),
        ("linux", None, None),
        ("win32", "/usr/bin/xdg-open", None),
    ],
)
def test_platform_opener(platform, which, expected):
    with patch("sys.platform", platform), patch("shutil.which", return_value=which):
        assert platform_opener() == expected


def test_wait_uses_terminal_editor(bundle, editor_env):
    with patch("sys.platform", "linux"), patch("subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
        open_in_editor(bundle, wait=True)

    mock_run.assert_called_once_with(["vim", "-u", "NONE", str(bundle.resolve())])


def test_desktop_opener_used_without_wait(bundle, editor_env):
    with (
        patch("sys.platform", "linux"),
        patch("shutil.which", return_value="/usr/bin/xdg-open"),
        patch("subprocess.run", return_value=MagicMock(returncode=0)) as mock_run,
    ):
        open_in_editor(bundle)

    mock_run.assert_called_once_with(["xdg-open", str(bundle.resolve())])


def test_failed_opener_falls_back_to_terminal_editor(bundle, editor_env):
    results = [MagicMock(returncode=3), MagicMock(returncode=0)]
    with (
        patch("sys.platform", "linux"),
        patch("shutil.which", return_value="/usr/bin/xdg-open"),
        patch("subprocess.run", side_effect=results) as mock_run,
    ):
        open_in_editor(bundle)

    assert mock_run.call_count == 2
    assert mock_run.call_args[0][0][0] == "vim"


def test_editor_exit_status(bundle, editor_env):
    with patch("sys.platform", "linux"), patch("subprocess.run", return_value=MagicMock(returncode=1)):
        with pytest.raises(EditorError, match="status: 1"):
            open_in_editor(bundle, wait=True)


def test_editor_cannot_start(bundle, editor_env):
    with patch("sys.platform", "linux"), patch("subprocess.run", side_effect=FileNotFoundError("vim")):
        with pytest.raises(EditorError, match="Failed to open editor 'vim -u NONE'"):
            open_in_editor(bundle, wait=True)


def test_delete_output(bundle):
    delete_output(bundle)
    assert not bundle.exists()


def test_delete_missing_output(tmp_path):
    with pytest.raises(EditorError):
        delete_output(tmp_path / "missing.txt")
