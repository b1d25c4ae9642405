"""brew-taps - Install and synchronize tap repositories.

Public API exports.

Library mechanism only: apps inject policy (taps root, lock path, mirror).
"""

from .discovery import TapFormulae
from .discovery import discover_formula_files
from .exceptions import GitCommandError
from .exceptions import TapCloneError
from .exceptions import TapError
from .exceptions import TapInvalidNameError
from .exceptions import TapNotInstalledError
from .exceptions import TapRemoteMismatchError
from .guard import InstallDecision
from .guard import inspect_install_state
from .installer import install_tap
from .installer import uninstall_tap
from .lock import TapLock
from .lock import TapLockEntry
from .protocols import DescriptionCacheProtocol
from .protocols import MirrorStrategy
from .registry import TapRegistry
from .remotes import RemotePlan
from .remotes import TemplateMirror
from .remotes import default_remote
from .remotes import resolve_remotes
from .schema import InstallErrorKind
from .schema import InstallOptions
from .schema import InstallOutcome
from .schema import InstallStatus
from .settings import TapSettings
from .tap import CloneDepth
from .tap import Tap

__all__ = [
    # Model
    "Tap",
    "CloneDepth",
    # Lookup
    "TapRegistry",
    "TapSettings",
    # Installation
    "install_tap",
    "uninstall_tap",
    "inspect_install_state",
    "InstallDecision",
    "InstallOptions",
    "InstallOutcome",
    "InstallStatus",
    "InstallErrorKind",
    # Remotes
    "RemotePlan",
    "TemplateMirror",
    "default_remote",
    "resolve_remotes",
    "MirrorStrategy",
    # Collaborators
    "DescriptionCacheProtocol",
    "TapFormulae",
    "discover_formula_files",
    # Lock file
    "TapLock",
    "TapLockEntry",
    # Exceptions
    "TapError",
    "TapInvalidNameError",
    "TapRemoteMismatchError",
    "TapCloneError",
    "TapNotInstalledError",
    "GitCommandError",
]

__version__ = "0.1.0"
