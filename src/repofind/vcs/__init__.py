"""
VCS helpers: locate the enclosing checkout and list its tracked files.

Re-exports the public pieces so callers can write
``from repofind.vcs import locate_repository_root, list_tracked_files``.
"""

from .lister import build_list_command, list_tracked_files, split_output
from .locator import RepositoryMatch, locate_repository_root, normalize_start_directory
from .runner import CommandResult, CommandRunner, ShellCommandRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "RepositoryMatch",
    "ShellCommandRunner",
    "build_list_command",
    "list_tracked_files",
    "locate_repository_root",
    "normalize_start_directory",
    "split_output",
]
