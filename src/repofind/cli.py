"""Command line interface for repofind."""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from repofind.choosers import PromptChooser, select_chooser
from repofind.config import FinderSettings
from repofind.exceptions import RepoFindError
from repofind.finder import find_file_in_repository
from repofind.opener import EditorOpener, PrintOpener
from repofind.vcs import ShellCommandRunner, list_tracked_files, locate_repository_root

app = typer.Typer(
    help="Open a file tracked by the enclosing version-control checkout.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger = logging.getLogger(__name__)

COMMANDS = ("find", "root", "list")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _configure_logging(level: str, verbose: bool) -> None:
    """Send log records to stderr so stdout stays clean for paths."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _load_settings(verbose: bool, **overrides: Any) -> FinderSettings:
    """Build settings from env/YAML, applying only the options actually given."""
    try:
        settings = FinderSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        typer.echo(f"Error: invalid configuration: {e}", err=True)
        raise SystemExit(2)
    _configure_logging(settings.log_level, verbose)
    return settings


def _start_directory(start: Optional[Path]) -> Path:
    start_dir = (start or Path.cwd()).expanduser()
    if not start_dir.exists():
        typer.echo(f"Error: Directory not found: {start_dir}", err=True)
        raise SystemExit(1)
    return start_dir


@app.command(name="find")
def find(
    start: Optional[Path] = typer.Argument(
        None, help="Directory to start from (default: current directory)."
    ),
    print_path: bool = typer.Option(
        False, "--print", help="Print the chosen path instead of opening it."
    ),
    basic: bool = typer.Option(
        False, "--basic", help="Use the line-based chooser even on a capable terminal."
    ),
    allow_home: bool = typer.Option(
        False, "--allow-home", help="Accept a checkout rooted at the home directory."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds the VCS listing command may run."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Choose a tracked file of the enclosing checkout and open it.

    Outside a checkout, prompts for a path relative to START instead.
    """
    settings = _load_settings(
        verbose,
        avoid_home_repository=False if allow_home else None,
        command_timeout_seconds=timeout,
    )
    start_dir = _start_directory(start)

    chooser = PromptChooser() if basic else select_chooser(settings)
    opener = PrintOpener() if print_path else EditorOpener(settings.resolve_editor())

    try:
        result = find_file_in_repository(
            start_dir,
            settings=settings,
            chooser=chooser,
            opener=opener,
            runner=ShellCommandRunner(timeout=settings.command_timeout_seconds),
        )
    except RepoFindError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    if result.cancelled:
        typer.echo("Cancelled", err=True)


@app.command(name="root")
def root(
    start: Optional[Path] = typer.Argument(
        None, help="Directory to start from (default: current directory)."
    ),
    allow_home: bool = typer.Option(
        False, "--allow-home", help="Accept a checkout rooted at the home directory."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Print the root of the checkout enclosing START."""
    settings = _load_settings(verbose, avoid_home_repository=False if allow_home else None)
    match = locate_repository_root(
        _start_directory(start),
        settings.descriptors,
        avoid_home=settings.avoid_home_repository,
        home_directory=settings.home_directory,
    )
    if match is None:
        typer.echo("Error: Not inside a repository", err=True)
        raise SystemExit(1)
    typer.echo(str(match.root))


@app.command(name="list")
def list_files(
    start: Optional[Path] = typer.Argument(
        None, help="Directory to start from (default: current directory)."
    ),
    null: bool = typer.Option(
        False, "--null", "-0", help="Terminate entries with NUL instead of newline."
    ),
    allow_home: bool = typer.Option(
        False, "--allow-home", help="Accept a checkout rooted at the home directory."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Seconds the VCS listing command may run."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Print the files tracked by the checkout enclosing START."""
    settings = _load_settings(
        verbose,
        avoid_home_repository=False if allow_home else None,
        command_timeout_seconds=timeout,
    )
    match = locate_repository_root(
        _start_directory(start),
        settings.descriptors,
        avoid_home=settings.avoid_home_repository,
        home_directory=settings.home_directory,
    )
    if match is None:
        typer.echo("Error: Not inside a repository", err=True)
        raise SystemExit(1)

    try:
        files = list_tracked_files(
            match.root,
            match.descriptor,
            ShellCommandRunner(timeout=settings.command_timeout_seconds),
        )
    except RepoFindError as e:
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    terminator = "\0" if null else "\n"
    typer.echo("".join(f"{name}{terminator}" for name in files), nl=False)


# Entry point for console script
def main(argv: list[str] | None = None) -> Any:
    """Dispatch to the typer app, defaulting to the ``find`` command.

    ``repofind``, ``repofind some/dir`` and ``repofind find some/dir`` are
    equivalent; ``root`` and ``list`` must be named explicitly.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    if not argv or argv[0] not in (*COMMANDS, "-h", "--help"):
        argv.insert(0, "find")

    return app(args=argv, prog_name="repofind")
