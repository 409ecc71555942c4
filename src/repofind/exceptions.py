"""
Exception types raised by repofind.

"No repository found" is deliberately absent: it is an expected outcome that
triggers the open-by-path fallback, not an error.
"""


class RepoFindError(Exception):
    """Base exception for repofind failures."""

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize repofind error.

        Args:
            message: Human-readable error message
            context: Additional context dict with details
        """
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return formatted error string for logging."""
        context_str = f" | Context: {self.context}" if self.context else ""
        return f"{self.message}{context_str}"


class VcsCommandError(RepoFindError):
    """A VCS listing command exited non-zero or could not be started."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
        context: dict | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, context)


class VcsToolNotFoundError(VcsCommandError):
    """The marker is present but the VCS tool is not installed."""


class CommandTimeoutError(VcsCommandError):
    """The listing command did not finish within the configured timeout."""


class OpenerError(RepoFindError):
    """The editor used to open the chosen file failed."""
