"""Tap lock file management.

Tracks installed taps (canonical remote, commit, path, depth) and the pinned
flag of each tap. The lock path is injected by the app.
"""

import json
import logging
from dataclasses import asdict
from dataclasses import dataclass
from datetime import UTC
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class TapLockEntry:
    """Entry in the taps lock file."""

    name: str
    remote: str
    commit: str | None
    path: str
    depth: str
    installed_at: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TapLockEntry":
        """Create from dictionary."""
        return cls(**data)


class TapLock:
    """
    Taps lock file manager (with injected lock path).

    Lock format (JSON):
    {
      "version": "1.0",
      "taps": {
        "caskroom/cask": {
          "name": "caskroom/cask",
          "remote": "https://github.com/caskroom/homebrew-cask",
          "commit": "abc123...",
          "path": "/usr/local/Library/Taps/caskroom/homebrew-cask",
          "depth": "shallow",
          "installed_at": "2025-10-26T12:00:00+00:00"
        }
      },
      "pinned": ["caskroom/cask"]
    }

    Pinned flags live outside the tap entries and do not require the tap to
    be installed.
    """

    VERSION = "1.0"

    def __init__(self, lock_path: Path):
        """Initialize lock manager with app-provided lock path.

        Args:
            lock_path: Path to lock file (app determines location)

        Example:
            >>> lock = TapLock(lock_path=Path.home() / ".brew-taps" / "taps.lock")
        """
        self.lock_path = lock_path
        self._data: dict[str, TapLockEntry] = {}
        self._pinned: set[str] = set()
        self._load()

    def _load(self) -> None:
        """Load lock file if it exists."""
        if not self.lock_path.exists():
            self._data = {}
            self._pinned = set()
            return

        try:
            with open(self.lock_path) as f:
                data = json.load(f)

            if data.get("version") != self.VERSION:
                logger.warning(f"Lock file version mismatch: expected {self.VERSION}, got {data.get('version')}")

            taps = data.get("taps", {})
            self._data = {name: TapLockEntry.from_dict(entry) for name, entry in taps.items()}
            self._pinned = set(data.get("pinned", []))

            logger.debug(f"Loaded {len(self._data)} taps from lock file")

        except Exception as e:
            logger.error(f"Failed to load lock file: {e}")
            self._data = {}
            self._pinned = set()

    def _save(self) -> None:
        """Save lock file."""
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": self.VERSION,
            "taps": {name: entry.to_dict() for name, entry in sorted(self._data.items())},
            "pinned": sorted(self._pinned),
        }

        try:
            with open(self.lock_path, "w") as f:
                json.dump(data, f, indent=2)
            logger.debug(f"Saved lock file with {len(self._data)} taps")
        except Exception as e:
            logger.error(f"Failed to save lock file: {e}")

    def add_entry(
        self,
        name: str,
        remote: str,
        commit: str | None,
        path: Path,
        depth: str,
    ) -> None:
        """
        Add or update tap in lock file.

        Args:
            name: Tap name (owner/name)
            remote: Canonical remote URL
            commit: HEAD commit SHA after install
            path: Clone location
            depth: "shallow" or "full"
        """
        self._data[name] = TapLockEntry(
            name=name,
            remote=remote,
            commit=commit,
            path=str(path),
            depth=depth,
            installed_at=datetime.now(UTC).isoformat(),
        )
        self._save()

        logger.debug(f"Added {name} to lock file")

    def remove_entry(self, name: str) -> None:
        """Remove tap from lock file."""
        if name in self._data:
            del self._data[name]
            self._save()
            logger.debug(f"Removed {name} from lock file")

    def get_entry(self, name: str) -> TapLockEntry | None:
        return self._data.get(name)

    def list_entries(self) -> list[TapLockEntry]:
        return list(self._data.values())

    def is_installed(self, name: str) -> bool:
        """Check if tap is tracked in the lock file."""
        return name in self._data

    def pin(self, name: str) -> None:
        if name not in self._pinned:
            self._pinned.add(name)
            self._save()

    def unpin(self, name: str) -> None:
        if name in self._pinned:
            self._pinned.discard(name)
            self._save()

    def is_pinned(self, name: str) -> bool:
        return name in self._pinned

    def pinned_names(self) -> list[str]:
        return sorted(self._pinned)
