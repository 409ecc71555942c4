"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path
from typing import Optional

import pytest

from repofind.config import NUL, FinderSettings, VcsDescriptor
from repofind.vcs.runner import CommandResult

# Marker names no real directory tree above tmp_path will contain.
TEST_MARKER = ".repofind-test-vcs"
OTHER_MARKER = ".repofind-other-vcs"


class FakeRunner:
    """Stand-in for ShellCommandRunner that returns canned output."""

    def __init__(self, stdout: str = "", returncode: int = 0, stderr: str = ""):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[tuple[Path, str]] = []

    def run(self, working_directory: Path, command: str) -> CommandResult:
        self.calls.append((working_directory, command))
        return CommandResult(
            command=command,
            returncode=self.returncode,
            stdout=self.stdout,
            stderr=self.stderr,
        )


class RecordingChooser:
    """Chooser that picks a fixed label (or cancels) and remembers its input."""

    def __init__(self, pick: Optional[str] = None):
        self.pick = pick
        self.seen: Optional[list[str]] = None
        self.prompt: Optional[str] = None

    def choose(self, candidates, prompt):
        self.seen = list(candidates)
        self.prompt = prompt
        return self.pick


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the user's config file and REPOFIND_* variables out of tests."""
    for name in list(os.environ):
        if name.startswith("REPOFIND_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("REPOFIND_CONFIG", str(tmp_path / "no-such-config.yml"))
    monkeypatch.delenv("VISUAL", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)


@pytest.fixture
def test_descriptor() -> VcsDescriptor:
    return VcsDescriptor(marker=TEST_MARKER, list_command="test-vcs ls -0", separator=NUL)


@pytest.fixture
def other_descriptor() -> VcsDescriptor:
    return VcsDescriptor(marker=OTHER_MARKER, list_command="other-vcs ls", separator="\n")


@pytest.fixture
def home_dir(tmp_path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home.resolve()


@pytest.fixture
def settings(test_descriptor, other_descriptor, home_dir) -> FinderSettings:
    """Settings whose VCS table only knows the test markers."""
    return FinderSettings(
        repository_types=[test_descriptor, other_descriptor],
        home_directory=home_dir,
    )


@pytest.fixture
def repo_tree(tmp_path) -> Path:
    """Create ``repo/<marker>/`` and ``repo/src/deep/file.txt``; return ``repo``."""
    repo = tmp_path / "repo"
    (repo / TEST_MARKER).mkdir(parents=True)
    deep = repo / "src" / "deep"
    deep.mkdir(parents=True)
    (deep / "file.txt").write_text("hello\n")
    (repo / "README.md").write_text("# repo\n")
    return repo.resolve()
