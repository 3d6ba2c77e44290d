"""Test configuration and fixtures for treeclip."""

import pytest


@pytest.fixture
def project_dir(tmp_path):
    """Create a small project tree.

    project/
    ├── .env
    ├── .git/config
    ├── README.md
    ├── src/main.py
    ├── src/utils/helpers.py
    ├── target/debug/app.bin
    └── logs/run.log
    """
    root = tmp_path / "project"
    (root / "src" / "utils").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "target" / "debug").mkdir(parents=True)
    (root / "logs").mkdir()

    (root / ".env").write_text("SECRET=1\n")
    (root / ".git" / "config").write_text("[core]\n")
    (root / "README.md").write_text("# Project\n")
    (root / "src" / "main.py").write_text("def main():\n    pass\n")
    (root / "src" / "utils" / "helpers.py").write_text("def helper():\n    pass\n")
    (root / "target" / "debug" / "app.bin").write_text("build output\n")
    (root / "logs" / "run.log").write_text("started\n")
    return root
