"""Process-level settings for the brew-taps command.

Loaded once at the process boundary from ``BREW_TAPS_*`` environment
variables and turned into the injected policy objects (taps root, lock,
mirror) and per-invocation InstallOptions.
"""

from pathlib import Path

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from .lock import TapLock
from .registry import TapRegistry
from .remotes import TemplateMirror
from .schema import InstallOptions


def _default_home() -> Path:
    return Path.home() / ".brew-taps"


class TapSettings(BaseSettings):
    """Where taps live and how they are fetched.

    - BREW_TAPS_ROOT: taps root (default ``~/.brew-taps/Taps``)
    - BREW_TAPS_LOCK: lock file (default ``~/.brew-taps/taps.lock``)
    - BREW_TAPS_MIRROR: mirror URL template with ``{owner}``/``{name}``
    - BREW_TAPS_DEVELOPER: developer mode, implies full clones
    """

    model_config = SettingsConfigDict(
        env_prefix="BREW_TAPS_",
        env_ignore_empty=True,
        populate_by_name=True,
        frozen=True,
    )

    taps_root: Path = Field(
        default_factory=lambda: _default_home() / "Taps",
        validation_alias="BREW_TAPS_ROOT",
    )
    lock_path: Path = Field(
        default_factory=lambda: _default_home() / "taps.lock",
        validation_alias="BREW_TAPS_LOCK",
    )
    mirror_template: str | None = Field(
        default=None,
        validation_alias="BREW_TAPS_MIRROR",
    )
    developer: bool = False

    @field_validator("taps_root", "lock_path")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    def mirror(self) -> TemplateMirror | None:
        return TemplateMirror(self.mirror_template) if self.mirror_template else None

    def lock(self) -> TapLock:
        return TapLock(lock_path=self.lock_path)

    def registry(self, lock: TapLock | None = None) -> TapRegistry:
        return TapRegistry(self.taps_root, lock=lock)

    def install_options(self, *, full: bool, quiet: bool, clone_target: str | None) -> InstallOptions:
        """Install options for one invocation; developers always get full clones."""
        return InstallOptions(full_clone=full or self.developer, quiet=quiet, clone_target=clone_target)
