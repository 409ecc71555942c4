"""Run shell commands for the tracked-file lister.

The lister talks to a :class:`CommandRunner` rather than to ``subprocess``
directly so tests can substitute canned output for real VCS tools.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from repofind.exceptions import CommandTimeoutError, VcsCommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one command."""

    command: str
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Anything that can run a shell command in a directory and capture its output."""

    def run(self, working_directory: Path, command: str) -> CommandResult:
        ...


class ShellCommandRunner:
    """Runs commands through the shell with a timeout, blocking until they exit."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.timeout = timeout

    def run(self, working_directory: Path, command: str) -> CommandResult:
        """Run ``command`` with ``/bin/sh`` in ``working_directory``.

        Raises:
            CommandTimeoutError: If the command runs longer than ``timeout``.
            VcsCommandError: If the shell cannot be started.
        """
        logger.debug(f"Running {command!r} in {working_directory}")
        try:
            completed = subprocess.run(
                command,
                shell=True,
                cwd=str(working_directory),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise CommandTimeoutError(
                f"Command timed out after {self.timeout:g}s: {command}",
                command=command,
                context={"cwd": str(working_directory)},
            ) from exc
        except OSError as exc:
            raise VcsCommandError(
                f"Could not run command: {exc}",
                command=command,
                context={"cwd": str(working_directory)},
            ) from exc

        return CommandResult(
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
