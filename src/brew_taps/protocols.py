"""Protocols for collaborators the installer calls into.

Apps provide the implementations; the library only needs these interfaces.
"""

from typing import TYPE_CHECKING
from typing import Protocol
from typing import runtime_checkable

if TYPE_CHECKING:
    from .tap import Tap


@runtime_checkable
class MirrorStrategy(Protocol):
    """Supplies an alternate remote to try before a tap's canonical remote."""

    def mirror_for(self, tap: "Tap") -> str | None:
        """Return a mirror URL for the tap, or None to clone from the canonical remote.

        Args:
            tap: Tap about to be cloned
        """
        ...


@runtime_checkable
class DescriptionCacheProtocol(Protocol):
    """Receives formula names after a tap is installed.

    Notification is fire-and-forget: failures never affect the install outcome.
    """

    def cache_formulae(self, formula_names: list[str]) -> None:
        """Record descriptions for the given fully-qualified formula names.

        Args:
            formula_names: Names like ``"owner/name/formula"``
        """
        ...
