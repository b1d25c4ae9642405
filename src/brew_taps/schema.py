"""Install request and outcome models.

Expected results of an install ("already tapped", "already unshallow") are
outcomes, not exceptions. Failures carry an explicit error kind so callers can
match on it.
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import TapCloneError
from .exceptions import TapRemoteMismatchError


class InstallOptions(BaseModel):
    """Per-invocation install options, built once at the process boundary."""

    model_config = ConfigDict(frozen=True)

    full_clone: bool = False
    quiet: bool = False
    clone_target: str | None = None


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    UPGRADED = "upgraded"
    ALREADY_INSTALLED = "already_installed"
    ALREADY_FULL = "already_full"
    FAILED = "failed"


class InstallErrorKind(str, Enum):
    REMOTE_MISMATCH = "remote_mismatch"
    CLONE_FAILED = "clone_failed"


class InstallOutcome(BaseModel):
    """Result of one install request."""

    model_config = ConfigDict(frozen=True)

    status: InstallStatus
    tap: str
    path: Path
    remote: str | None = None
    formula_count: int = 0
    error: InstallErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is not InstallStatus.FAILED

    @property
    def changed(self) -> bool:
        """True when the install touched the filesystem."""
        return self.status in (InstallStatus.INSTALLED, InstallStatus.UPGRADED)

    def raise_for_error(self) -> "InstallOutcome":
        """Raise the exception matching a failed outcome, else return self.

        Raises:
            TapRemoteMismatchError: For remote mismatches
            TapCloneError: For clone failures
        """
        context = {"tap": self.tap, "path": str(self.path)}
        if self.error is InstallErrorKind.REMOTE_MISMATCH:
            raise TapRemoteMismatchError(self.message, context=context)
        if self.error is InstallErrorKind.CLONE_FAILED:
            raise TapCloneError(self.message, context=context)
        return self
