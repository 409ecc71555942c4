"""Line-based chooser for terminals without full-screen support."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import typer

from repofind.choosers.base import filter_candidates

logger = logging.getLogger(__name__)


class PromptChooser:
    """Narrow the candidates with typed filters, then pick by number.

    Each round lists the current matches, numbered. The reply can be:

    * an exact label, which selects it;
    * a number from the list, which selects that entry;
    * any other text, which becomes the new filter;
    * nothing, which cancels.

    A filter that leaves exactly one match selects it.
    """

    def __init__(self, max_shown: int = 20):
        self.max_shown = max_shown

    def _show(self, matches: List[str]) -> None:
        for number, label in enumerate(matches[: self.max_shown], start=1):
            typer.echo(f"{number:>3}  {label}", err=True)
        hidden = len(matches) - self.max_shown
        if hidden > 0:
            typer.echo(f"     ... {hidden} more, type to narrow", err=True)

    def choose(self, candidates: Sequence[str], prompt: str) -> Optional[str]:
        if not candidates:
            typer.echo("No files to choose from", err=True)
            return None

        labels = set(candidates)
        matches = list(candidates)
        while True:
            self._show(matches)
            try:
                reply = typer.prompt(prompt.rstrip(": "), default="", show_default=False)
            except typer.Abort:
                return None

            reply = reply.strip()
            if not reply:
                return None
            if reply in labels:
                return reply
            if reply.isdigit() and 1 <= int(reply) <= min(len(matches), self.max_shown):
                return matches[int(reply) - 1]

            narrowed = filter_candidates(reply, candidates)
            if len(narrowed) == 1:
                return narrowed[0]
            if not narrowed:
                typer.echo(f"No match for {reply!r}", err=True)
                continue
            logger.debug(f"Filter {reply!r} left {len(narrowed)} matches")
            matches = narrowed
