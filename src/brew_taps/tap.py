"""Tap identity model - owner/name plus the paths derived from them.

A tap's on-disk location is a pure function of (owner, name) and the taps root,
so two taps with the same identity always share a path and two different
identities never do.
"""

import re
from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from .exceptions import TapInvalidNameError

REPO_PREFIX = "homebrew-"

_COMPONENT_RE = re.compile(r"^[\w-][\w.-]*$")


class CloneDepth(str, Enum):
    """History depth of a local tap clone."""

    SHALLOW = "shallow"
    FULL = "full"


class Tap(BaseModel):
    """A repository-backed extension of the formula catalog (immutable)."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    taps_root: Path
    pinned: bool = False

    @field_validator("owner", "name")
    @classmethod
    def _normalize_component(cls, value: str) -> str:
        value = value.strip().lower()
        if not value or not _COMPONENT_RE.match(value):
            raise ValueError(f"invalid tap component: {value!r}")
        return value

    @field_validator("name")
    @classmethod
    def _strip_repo_prefix(cls, value: str) -> str:
        if value.startswith(REPO_PREFIX):
            value = value[len(REPO_PREFIX) :]
        if not value:
            raise ValueError("tap name is empty after removing the repository prefix")
        return value

    @classmethod
    def parse(cls, identifier: str, taps_root: Path) -> "Tap":
        """Build a tap from an ``owner/name`` identifier.

        Args:
            identifier: Tap identifier, e.g. ``"caskroom/cask"`` or ``"Foo/homebrew-bar"``
            taps_root: Directory holding all tap clones

        Returns:
            Tap instance with lower-cased identity

        Raises:
            TapInvalidNameError: If the identifier is not exactly two non-empty components
        """
        parts = identifier.strip().split("/")
        if len(parts) != 2:
            raise TapInvalidNameError(
                f"Invalid tap name '{identifier}': expected <owner>/<name>",
                context={"identifier": identifier},
            )
        try:
            return cls(owner=parts[0], name=parts[1], taps_root=taps_root)
        except ValueError as e:
            raise TapInvalidNameError(f"Invalid tap name '{identifier}'", context={"identifier": identifier}) from e

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def repo_name(self) -> str:
        return f"{REPO_PREFIX}{self.name}"

    @property
    def path(self) -> Path:
        return self.taps_root / self.owner / self.repo_name

    @property
    def git_dir(self) -> Path:
        return self.path / ".git"

    @property
    def installed(self) -> bool:
        """True iff the tap directory exists and holds git metadata."""
        return self.git_dir.exists()

    @property
    def depth(self) -> CloneDepth | None:
        """Clone depth of the local copy, or None when not installed.

        git writes ``.git/shallow`` for clones with truncated history and
        removes it once the history has been completed.
        """
        if not self.installed:
            return None
        if (self.git_dir / "shallow").exists():
            return CloneDepth.SHALLOW
        return CloneDepth.FULL

    @property
    def shallow(self) -> bool:
        return self.depth is CloneDepth.SHALLOW

    def __str__(self) -> str:
        return self.full_name
