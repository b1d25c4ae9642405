"""Tap lookup - resolve identifiers to Tap objects and list installed taps.

The taps root is app policy and is injected; nothing here is hardcoded.
"""

import logging
from pathlib import Path

from .exceptions import TapInvalidNameError
from .lock import TapLock
from .tap import REPO_PREFIX
from .tap import Tap

logger = logging.getLogger(__name__)


class TapRegistry:
    """
    Construct taps under one taps root (with injected root and lock).

    Layout: ``<taps_root>/<owner>/homebrew-<name>/.git``
    """

    def __init__(self, taps_root: Path, lock: TapLock | None = None):
        """Initialize registry.

        Args:
            taps_root: Directory holding all tap clones
            lock: Optional lock file, source of the pinned flags

        Example:
            >>> registry = TapRegistry(Path("/usr/local/Library/Taps"))
            >>> tap = registry.fetch_name("caskroom/cask")
        """
        self.taps_root = taps_root
        self.lock = lock

    def _pinned(self, full_name: str) -> bool:
        return self.lock is not None and self.lock.is_pinned(full_name)

    def fetch(self, owner: str, name: str) -> Tap:
        """Build the tap for (owner, name), whether installed or not."""
        tap = Tap.parse(f"{owner}/{name}", taps_root=self.taps_root)
        if self._pinned(tap.full_name):
            tap = tap.model_copy(update={"pinned": True})
        return tap

    def fetch_name(self, identifier: str) -> Tap:
        """Build the tap for an ``owner/name`` identifier.

        Raises:
            TapInvalidNameError: If the identifier is malformed
        """
        tap = Tap.parse(identifier, taps_root=self.taps_root)
        return self.fetch(tap.owner, tap.name)

    def list_installed(self) -> list[Tap]:
        """List installed taps, sorted by name."""
        if not self.taps_root.is_dir():
            return []

        taps = []
        for owner_dir in sorted(self.taps_root.iterdir()):
            if not owner_dir.is_dir() or owner_dir.name.startswith("."):
                continue
            for repo_dir in sorted(owner_dir.iterdir()):
                if not repo_dir.name.startswith(REPO_PREFIX) or not (repo_dir / ".git").exists():
                    continue
                try:
                    taps.append(self.fetch(owner_dir.name, repo_dir.name))
                except TapInvalidNameError as e:
                    logger.debug(f"Skipping {repo_dir}: {e}")
        return taps

    def names(self) -> list[str]:
        return [tap.full_name for tap in self.list_installed()]

    def list_pinned(self) -> list[str]:
        """Names of pinned taps (pinning does not require installation)."""
        if self.lock is None:
            return []
        return self.lock.pinned_names()
