"""List the files a checkout's VCS tool tracks."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import List, Optional

from repofind.config import VcsDescriptor
from repofind.exceptions import VcsCommandError, VcsToolNotFoundError
from repofind.vcs.runner import CommandRunner, ShellCommandRunner

logger = logging.getLogger(__name__)

# POSIX shells exit with 127 when the command name cannot be found.
COMMAND_NOT_FOUND = 127


def build_list_command(repository_root: Path, descriptor: VcsDescriptor) -> str:
    """Return ``cd <root> && <list command>`` with the root shell-quoted."""
    return f"cd {shlex.quote(str(repository_root))} && {descriptor.list_command}"


def split_output(output: str, separator: str) -> List[str]:
    """Split command output into entries, dropping empty ones.

    Empty entries come from trailing or doubled separators. A file whose
    name is genuinely empty would be dropped too; no supported VCS emits one.
    """
    return [entry for entry in output.split(separator) if entry]


def list_tracked_files(
    repository_root: Path,
    descriptor: VcsDescriptor,
    runner: Optional[CommandRunner] = None,
) -> List[str]:
    """Return the paths, relative to ``repository_root``, that the VCS tracks.

    Entries keep the tool's own order and ignore rules; nothing is sorted,
    deduplicated or normalised.

    Raises:
        VcsToolNotFoundError: The VCS executable is not installed.
        VcsCommandError: The command exited non-zero.
        CommandTimeoutError: The command exceeded the runner's timeout.
    """
    runner = runner or ShellCommandRunner()
    command = build_list_command(repository_root, descriptor)
    result = runner.run(Path(repository_root), command)

    if result.returncode == COMMAND_NOT_FOUND:
        raise VcsToolNotFoundError(
            f"'{descriptor.list_command.split()[0]}' is not installed "
            f"but {repository_root} contains {descriptor.marker}",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )
    if not result.ok:
        raise VcsCommandError(
            f"'{descriptor.list_command}' exited with status {result.returncode}: "
            f"{result.stderr.strip()}",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    files = split_output(result.stdout, descriptor.separator)
    logger.info(f"{descriptor.marker} checkout at {repository_root} tracks {len(files)} files")
    return files
