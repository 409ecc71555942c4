"""Pick a tracked file of the enclosing checkout and open it.

Flow: locate the checkout root, list its tracked files, let the chooser pick
one, open ``root / choice``. Outside a checkout (or when the user interrupts
the listing) the user is asked for a path instead, relative to the start
directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer

from repofind.choosers.base import Chooser
from repofind.config import FinderSettings
from repofind.opener import Opener
from repofind.vcs.lister import list_tracked_files
from repofind.vcs.locator import (
    RepositoryMatch,
    locate_repository_root,
    normalize_start_directory,
)
from repofind.vcs.runner import CommandRunner, ShellCommandRunner

logger = logging.getLogger(__name__)

PathPrompt = Callable[[Path], Optional[str]]


@dataclass
class FindResult:
    """What :func:`find_file_in_repository` ended up doing."""

    path: Optional[Path]
    repository: Optional[RepositoryMatch] = None
    fell_back: bool = False

    @property
    def cancelled(self) -> bool:
        return self.path is None


def prompt_for_path(start_directory: Path) -> Optional[str]:
    """Ask for a path to open, relative to ``start_directory``.

    An empty reply comes back as ``""``; ``None`` means the user aborted
    with Ctrl-C or EOF.
    """
    try:
        return typer.prompt(
            f"Find file (relative to {start_directory}{os.sep})",
            default="",
            show_default=False,
            err=True,
        )
    except typer.Abort:
        return None


def resolve_fallback_path(answer: str, start_directory: Path) -> Path:
    """Turn a typed path into an absolute one, relative to ``start_directory``."""
    path = Path(answer.strip()).expanduser()
    if not path.is_absolute():
        path = start_directory / path
    return path


def _fall_back(
    start_directory: Path,
    opener: Opener,
    path_prompt: PathPrompt,
) -> FindResult:
    answer = path_prompt(start_directory)
    if answer is None or not answer.strip():
        logger.info("Open-by-path cancelled")
        return FindResult(path=None, fell_back=True)

    path = resolve_fallback_path(answer, start_directory)
    opener(path)
    return FindResult(path=path, fell_back=True)


def find_file_in_repository(
    start_directory: Optional[Path] = None,
    *,
    settings: FinderSettings,
    chooser: Chooser,
    opener: Opener,
    runner: Optional[CommandRunner] = None,
    path_prompt: PathPrompt = prompt_for_path,
) -> FindResult:
    """Let the user pick a tracked file of the enclosing checkout and open it.

    Args:
        start_directory: Where to start looking (default: current directory).
        settings: VCS table, home guard and chooser prompt.
        chooser: Interactive selection strategy.
        opener: Called with the absolute path of the chosen file.
        runner: Command runner for the listing command. Defaults to a
            :class:`ShellCommandRunner` with the configured timeout.
        path_prompt: Asks for a path when no checkout is found.

    Returns:
        A :class:`FindResult`; ``path`` is ``None`` when the user cancelled.

    Raises:
        VcsCommandError: The listing command failed (tool missing, non-zero
            exit or timeout).
    """
    start = normalize_start_directory(start_directory or Path.cwd())
    match = locate_repository_root(
        start,
        settings.descriptors,
        avoid_home=settings.avoid_home_repository,
        home_directory=settings.home_directory,
    )
    if match is None:
        logger.info(f"No checkout encloses {start}; falling back to open-by-path")
        return _fall_back(start, opener, path_prompt)

    runner = runner or ShellCommandRunner(timeout=settings.command_timeout_seconds)
    try:
        files = list_tracked_files(match.root, match.descriptor, runner)
    except KeyboardInterrupt:
        logger.info("Listing interrupted; falling back to open-by-path")
        return _fall_back(start, opener, path_prompt)

    choice = chooser.choose(files, settings.prompt)
    if choice is None:
        logger.info("Selection cancelled")
        return FindResult(path=None, repository=match)

    path = match.root / choice
    opener(path)
    return FindResult(path=path, repository=match)
