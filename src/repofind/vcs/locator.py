"""Find the checkout that encloses a directory.

The walk goes from the start directory towards the filesystem root and stops
at the first directory holding any configured marker, so nested checkouts
(a submodule inside a superproject) resolve to the inner one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

from repofind.config import VcsDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryMatch:
    """A checkout root together with the descriptor whose marker matched."""

    root: Path
    descriptor: VcsDescriptor


def _ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` and each of its parents, nearest first."""
    current = start
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def normalize_start_directory(start_directory: str | Path) -> Path:
    """Expand ``~``, resolve symlinks and step from a file to its directory."""
    start = Path(start_directory).expanduser().resolve()
    if start.is_file():
        start = start.parent
    return start


def _is_home(directory: Path, home_directory: Optional[Path]) -> bool:
    home = Path(home_directory) if home_directory is not None else Path.home()
    try:
        return directory == home.expanduser().resolve()
    except OSError:
        return False


def locate_repository_root(
    start_directory: str | Path,
    descriptors: Sequence[VcsDescriptor],
    *,
    avoid_home: bool = True,
    home_directory: Optional[Path] = None,
) -> Optional[RepositoryMatch]:
    """Return the nearest enclosing checkout of ``start_directory``.

    Args:
        start_directory: Directory (or file) to start from. ``~`` is expanded
            and symlinks are resolved.
        descriptors: VCS table; within one directory markers are checked in
            this order.
        avoid_home: When true, a checkout rooted exactly at the home
            directory is reported as no checkout.
        home_directory: Home directory for the guard (default: ``Path.home()``).

    Returns:
        The match, or ``None`` when the filesystem root is reached first or
        the home guard rejects the nearest match.
    """
    start = normalize_start_directory(start_directory)

    for directory in _ancestors(start):
        for descriptor in descriptors:
            if not (directory / descriptor.marker).exists():
                continue
            if avoid_home and _is_home(directory, home_directory):
                logger.debug(f"Ignoring {descriptor.marker} checkout at home directory {directory}")
                return None
            logger.debug(f"Found {descriptor.marker} checkout at {directory}")
            return RepositoryMatch(root=directory, descriptor=descriptor)

    logger.debug(f"No checkout encloses {start}")
    return None
