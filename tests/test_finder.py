"""Tests for the locate -> list -> choose -> open flow and its fallback."""

import shutil
import subprocess
from pathlib import Path

import pytest

from repofind.config import FinderSettings
from repofind.exceptions import VcsCommandError, VcsToolNotFoundError
from repofind.finder import find_file_in_repository, prompt_for_path, resolve_fallback_path
from repofind.vcs.locator import locate_repository_root
from repofind.vcs.lister import list_tracked_files

from conftest import TEST_MARKER, FakeRunner, RecordingChooser

TRACKED = "README.md\0src/deep/file.txt\0"


class OpenedPaths(list):
    """Opener that records what it was asked to open."""

    def __call__(self, path: Path) -> None:
        self.append(path)


def _never_prompt(start_directory):
    raise AssertionError("fallback prompt should not be used")


def test_selected_file_is_opened_relative_to_root(repo_tree, settings):
    chooser = RecordingChooser(pick="src/deep/file.txt")
    opened = OpenedPaths()

    result = find_file_in_repository(
        repo_tree / "src" / "deep",
        settings=settings,
        chooser=chooser,
        opener=opened,
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=_never_prompt,
    )

    assert result.repository.root == repo_tree
    assert result.path == repo_tree / "src" / "deep" / "file.txt"
    assert result.path.exists()
    assert opened == [result.path]
    assert not result.fell_back
    assert not result.cancelled


def test_chooser_receives_listing_and_prompt(repo_tree, settings):
    chooser = RecordingChooser(pick="README.md")

    find_file_in_repository(
        repo_tree,
        settings=settings,
        chooser=chooser,
        opener=OpenedPaths(),
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=_never_prompt,
    )

    assert chooser.seen == ["README.md", "src/deep/file.txt"]
    assert chooser.prompt == settings.prompt


def test_runner_is_invoked_in_repository_root(repo_tree, settings):
    runner = FakeRunner(stdout=TRACKED)

    find_file_in_repository(
        repo_tree / "src",
        settings=settings,
        chooser=RecordingChooser(pick="README.md"),
        opener=OpenedPaths(),
        runner=runner,
        path_prompt=_never_prompt,
    )

    (working_directory, command), = runner.calls
    assert working_directory == repo_tree
    assert command.endswith("&& test-vcs ls -0")


def test_cancelled_selection_opens_nothing(repo_tree, settings):
    opened = OpenedPaths()

    result = find_file_in_repository(
        repo_tree,
        settings=settings,
        chooser=RecordingChooser(pick=None),
        opener=opened,
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=_never_prompt,
    )

    assert result.cancelled
    assert result.repository is not None
    assert opened == []


def test_no_repository_falls_back_to_open_by_path(tmp_path, settings):
    plain = tmp_path / "plain"
    plain.mkdir()
    asked = []

    def prompt(start_directory):
        asked.append(start_directory)
        return "notes.txt"

    opened = OpenedPaths()
    result = find_file_in_repository(
        plain,
        settings=settings,
        chooser=RecordingChooser(pick="unused"),
        opener=opened,
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=prompt,
    )

    assert asked == [plain.resolve()]
    assert result.fell_back
    assert result.repository is None
    assert opened == [plain.resolve() / "notes.txt"]


def test_fallback_cancel_is_not_an_error(tmp_path, settings):
    result = find_file_in_repository(
        tmp_path,
        settings=settings,
        chooser=RecordingChooser(),
        opener=OpenedPaths(),
        path_prompt=lambda start: None,
    )
    assert result.fell_back
    assert result.cancelled


def test_home_repository_falls_back(home_dir, settings):
    (home_dir / TEST_MARKER).mkdir()
    runner = FakeRunner(stdout=TRACKED)

    result = find_file_in_repository(
        home_dir,
        settings=settings,
        chooser=RecordingChooser(pick="README.md"),
        opener=OpenedPaths(),
        runner=runner,
        path_prompt=lambda start: "",
    )

    assert result.fell_back
    assert runner.calls == []


def test_home_repository_used_when_guard_disabled(home_dir, settings):
    (home_dir / TEST_MARKER).mkdir()
    settings = settings.model_copy(update={"avoid_home_repository": False})

    result = find_file_in_repository(
        home_dir,
        settings=settings,
        chooser=RecordingChooser(pick="README.md"),
        opener=OpenedPaths(),
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=_never_prompt,
    )

    assert result.path == home_dir / "README.md"


def test_interrupted_listing_falls_back(repo_tree, settings):
    class InterruptedRunner:
        def run(self, working_directory, command):
            raise KeyboardInterrupt

    opened = OpenedPaths()
    result = find_file_in_repository(
        repo_tree / "src",
        settings=settings,
        chooser=RecordingChooser(pick="README.md"),
        opener=opened,
        runner=InterruptedRunner(),
        path_prompt=lambda start: "deep/file.txt",
    )

    assert result.fell_back
    assert opened == [repo_tree / "src" / "deep" / "file.txt"]


def test_listing_failure_is_reported(repo_tree, settings):
    with pytest.raises(VcsToolNotFoundError):
        find_file_in_repository(
            repo_tree,
            settings=settings,
            chooser=RecordingChooser(pick="README.md"),
            opener=OpenedPaths(),
            runner=FakeRunner(returncode=127),
            path_prompt=_never_prompt,
        )


def test_resolve_fallback_path(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    assert resolve_fallback_path("a/b.txt", tmp_path) == tmp_path / "a" / "b.txt"
    assert resolve_fallback_path("/etc/hosts", tmp_path) == Path("/etc/hosts")
    assert resolve_fallback_path("~/x ", tmp_path) == tmp_path / "home" / "x"


def test_file_start_outside_repository_falls_back_from_its_directory(tmp_path, settings):
    plain = tmp_path / "plain"
    plain.mkdir()
    (plain / "notes.txt").write_text("notes\n")
    asked = []

    def prompt(start_directory):
        asked.append(start_directory)
        return "other.txt"

    opened = OpenedPaths()
    result = find_file_in_repository(
        plain / "notes.txt",
        settings=settings,
        chooser=RecordingChooser(pick="unused"),
        opener=opened,
        path_prompt=prompt,
    )

    assert asked == [plain.resolve()]
    assert result.fell_back
    assert opened == [plain.resolve() / "other.txt"]


def test_file_start_inside_repository_lists_checkout(repo_tree, settings):
    result = find_file_in_repository(
        repo_tree / "src" / "deep" / "file.txt",
        settings=settings,
        chooser=RecordingChooser(pick="README.md"),
        opener=OpenedPaths(),
        runner=FakeRunner(stdout=TRACKED),
        path_prompt=_never_prompt,
    )

    assert result.repository.root == repo_tree
    assert result.path == repo_tree / "README.md"


def test_prompt_for_path_has_no_default(tmp_path, monkeypatch):
    seen = {}

    def fake_prompt(text, **kwargs):
        seen["text"] = text
        seen.update(kwargs)
        return kwargs["default"]

    monkeypatch.setattr("repofind.finder.typer.prompt", fake_prompt)

    assert prompt_for_path(tmp_path) == ""
    assert str(tmp_path) in seen["text"]
    assert seen["default"] == ""


def test_empty_fallback_answer_cancels(tmp_path, settings, monkeypatch):
    monkeypatch.setattr("repofind.finder.typer.prompt", lambda text, **kwargs: kwargs["default"])
    opened = OpenedPaths()

    result = find_file_in_repository(
        tmp_path,
        settings=settings,
        chooser=RecordingChooser(),
        opener=opened,
    )

    assert result.fell_back
    assert result.cancelled
    assert opened == []


# ==================== Real git ====================


@pytest.fixture
def git_repo(tmp_path):
    """A real git checkout with a tracked, an untracked and an ignored file."""
    repo = tmp_path / "gitrepo"
    deep = repo / "src" / "deep"
    deep.mkdir(parents=True)
    (deep / "file.txt").write_text("tracked\n")
    (repo / ".gitignore").write_text("*.log\n")
    (repo / "debug.log").write_text("ignored\n")
    (repo / "scratch.txt").write_text("untracked\n")

    subprocess.run(["git", "init", "-q"], cwd=repo, check=True, capture_output=True)
    subprocess.run(
        ["git", "add", ".gitignore", "src/deep/file.txt"],
        cwd=repo,
        check=True,
        capture_output=True,
    )
    return repo.resolve()


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_git_checkout_end_to_end(git_repo, home_dir):
    settings = FinderSettings(home_directory=home_dir)
    opened = OpenedPaths()
    chooser = RecordingChooser(pick="src/deep/file.txt")

    result = find_file_in_repository(
        git_repo / "src" / "deep",
        settings=settings,
        chooser=chooser,
        opener=opened,
        path_prompt=_never_prompt,
    )

    assert result.repository.root == git_repo
    assert result.repository.descriptor.marker == ".git"
    assert sorted(chooser.seen) == [".gitignore", "src/deep/file.txt"]
    assert opened == [git_repo / "src" / "deep" / "file.txt"]
    assert opened[0].exists()


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_git_listing_directly(git_repo, home_dir):
    match = locate_repository_root(
        git_repo / "src" / "deep",
        FinderSettings(home_directory=home_dir).descriptors,
        home_directory=home_dir,
    )
    files = list_tracked_files(match.root, match.descriptor)
    assert "src/deep/file.txt" in files
    assert "debug.log" not in files
    assert "scratch.txt" not in files


def test_broken_vcs_command_surfaces_error(repo_tree, test_descriptor, home_dir):
    broken = test_descriptor.model_copy(update={"list_command": "exit 2"})
    settings = FinderSettings(repository_types=[broken], home_directory=home_dir)

    with pytest.raises(VcsCommandError) as exc_info:
        find_file_in_repository(
            repo_tree,
            settings=settings,
            chooser=RecordingChooser(pick="README.md"),
            opener=OpenedPaths(),
            path_prompt=_never_prompt,
        )
    assert exc_info.value.returncode == 2
