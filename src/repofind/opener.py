"""Open the chosen file."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable

import typer

from repofind.exceptions import OpenerError

logger = logging.getLogger(__name__)

Opener = Callable[[Path], None]


class PrintOpener:
    """Write the path to stdout so the result can feed another command."""

    def __call__(self, path: Path) -> None:
        typer.echo(str(path))


class EditorOpener:
    """Open paths in an editor, blocking until it exits.

    With no editor configured the path is printed instead.
    """

    def __init__(self, editor: str = ""):
        self.editor = editor

    def __call__(self, path: Path) -> None:
        if not self.editor:
            logger.info("No editor configured; printing path")
            typer.echo(str(path))
            return

        argv = [*shlex.split(self.editor), str(path)]
        logger.debug(f"Opening {path} with {argv[0]}")
        try:
            result = subprocess.run(argv)
        except OSError as exc:
            raise OpenerError(f"Could not start editor '{self.editor}': {exc}") from exc
        if result.returncode != 0:
            raise OpenerError(
                f"Editor '{self.editor}' exited with status {result.returncode}",
                context={"path": str(path)},
            )
