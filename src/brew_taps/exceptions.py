"""Tap-specific exceptions.

Every error carries a human-readable message plus an optional context dict.
"""


class TapError(Exception):
    """Base exception for tap operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (paths, remotes, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class TapInvalidNameError(TapError):
    """Tap identifier is not of the form owner/name."""


class TapRemoteMismatchError(TapError):
    """Tap is already installed from a different remote."""


class TapCloneError(TapError):
    """Every candidate remote failed to clone."""


class TapNotInstalledError(TapError):
    """Tap is not installed."""


class GitCommandError(TapError):
    """A git invocation exited abnormally."""

    def __init__(self, message: str, returncode: int, stderr: str = "", context: dict | None = None):
        super().__init__(message, context)
        self.returncode = returncode
        self.stderr = stderr

    @property
    def signaled(self) -> bool:
        """True when git was terminated by a signal rather than exiting."""
        return self.returncode < 0
