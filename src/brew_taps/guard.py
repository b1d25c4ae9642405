"""Pre-clone inspection of a tap's local state."""

import logging
from enum import Enum

from .exceptions import TapRemoteMismatchError
from .git import git_remote_url
from .remotes import UPSTREAM_REMOTE
from .remotes import same_remote
from .tap import Tap

logger = logging.getLogger(__name__)


class InstallDecision(str, Enum):
    """What an install request should do given the tap's current state."""

    ALREADY_INSTALLED = "already_installed"
    ALREADY_FULL = "already_full"
    PROCEED_INSTALL = "proceed_install"
    PROCEED_UPGRADE = "proceed_upgrade"

    @property
    def proceeds(self) -> bool:
        return self in (InstallDecision.PROCEED_INSTALL, InstallDecision.PROCEED_UPGRADE)


async def recorded_remote(tap: Tap) -> str | None:
    """Canonical remote an installed tap was tapped from.

    A clone made from a mirror keeps its canonical remote as ``upstream``;
    otherwise ``origin`` is the canonical remote.
    """
    if not tap.installed:
        return None
    upstream = await git_remote_url(tap.path, UPSTREAM_REMOTE)
    if upstream:
        return upstream
    return await git_remote_url(tap.path, "origin")


async def inspect_install_state(
    tap: Tap,
    requested_remote: str | None,
    full_clone: bool,
) -> InstallDecision:
    """Decide whether an install request has work to do. Never mutates state.

    Args:
        tap: Tap to install
        requested_remote: Explicit clone URL, or None for the default
        full_clone: Whether full history is requested

    Returns:
        The install decision

    Raises:
        TapRemoteMismatchError: If the tap is installed from a different remote
    """
    if not tap.installed:
        return InstallDecision.PROCEED_INSTALL

    if requested_remote:
        current = await recorded_remote(tap)
        if current is None or not same_remote(current, requested_remote):
            raise TapRemoteMismatchError(
                f"Tap {tap} remote mismatch.\n{current} != {requested_remote}\n"
                f"Untap {tap} first to change its remote.",
                context={"tap": tap.full_name, "recorded": current, "requested": requested_remote},
            )

    if not full_clone:
        logger.debug(f"{tap} is already tapped")
        return InstallDecision.ALREADY_INSTALLED
    if not tap.shallow:
        logger.debug(f"{tap} is already unshallow")
        return InstallDecision.ALREADY_FULL
    return InstallDecision.PROCEED_UPGRADE
