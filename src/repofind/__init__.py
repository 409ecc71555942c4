"""
repofind: open a file tracked by the enclosing version-control checkout.

Re-exports the core operations so callers can write
``from repofind import locate_repository_root, list_tracked_files``.
"""

from .config import DEFAULT_REPOSITORY_TYPES, FinderSettings, VcsDescriptor
from .finder import FindResult, find_file_in_repository
from .vcs import RepositoryMatch, list_tracked_files, locate_repository_root

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REPOSITORY_TYPES",
    "FindResult",
    "FinderSettings",
    "RepositoryMatch",
    "VcsDescriptor",
    "find_file_in_repository",
    "list_tracked_files",
    "locate_repository_root",
]
