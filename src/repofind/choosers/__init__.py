"""
Interactive choosers.

Callers pick the chooser up front with :func:`select_chooser`; the finder only
sees the :class:`Chooser` interface.
"""

import os
import sys
from typing import Optional, TextIO

from repofind.config import FinderSettings

from .base import MAX_PROSPECTS, Chooser, filter_candidates
from .prompt import PromptChooser
from .textual_chooser import ChooserApp, TextualChooser


def _is_tty(stream: Optional[TextIO]) -> bool:
    try:
        return stream is not None and stream.isatty()
    except ValueError:
        # closed stream
        return False


def supports_enhanced_chooser(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> bool:
    """Return True if the terminal can host the full-screen chooser."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    if os.getenv("TERM", "") == "dumb":
        return False
    return _is_tty(stdin) and _is_tty(stdout)


def select_chooser(
    settings: FinderSettings,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> Chooser:
    """Pick the enhanced chooser when enabled and supported, else the basic one."""
    if settings.use_enhanced_chooser and supports_enhanced_chooser(stdin, stdout):
        return TextualChooser()
    return PromptChooser()


__all__ = [
    "MAX_PROSPECTS",
    "Chooser",
    "ChooserApp",
    "PromptChooser",
    "TextualChooser",
    "filter_candidates",
    "select_chooser",
    "supports_enhanced_chooser",
]
