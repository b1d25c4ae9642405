"""Tap installation.

Composes the state guard, remote resolution and the fallback clone (run
inside the interrupt scope) into ``install_tap``. Policy (where taps live,
which mirror to prefer, where the lock file is) is injected by the app.
"""

import logging
import shutil

from .cloner import clone_with_fallback
from .cloner import unshallow
from .discovery import discover_formula_files
from .discovery import pluralize_formula
from .exceptions import GitCommandError
from .exceptions import TapCloneError
from .exceptions import TapError
from .exceptions import TapNotInstalledError
from .exceptions import TapRemoteMismatchError
from .git import git_head_commit
from .guard import InstallDecision
from .guard import inspect_install_state
from .guard import recorded_remote
from .interrupt import cleanup_on_interrupt
from .lock import TapLock
from .protocols import DescriptionCacheProtocol
from .protocols import MirrorStrategy
from .remotes import resolve_remotes
from .schema import InstallErrorKind
from .schema import InstallOptions
from .schema import InstallOutcome
from .schema import InstallStatus
from .tap import Tap

logger = logging.getLogger(__name__)


def _failure(tap: Tap, kind: InstallErrorKind, message: str) -> InstallOutcome:
    return InstallOutcome(status=InstallStatus.FAILED, tap=tap.full_name, path=tap.path, error=kind, message=message)


async def install_tap(
    tap: Tap,
    options: InstallOptions | None = None,
    *,
    mirror: MirrorStrategy | None = None,
    lock: TapLock | None = None,
    description_cache: DescriptionCacheProtocol | None = None,
) -> InstallOutcome:
    """
    Install (clone) a tap, or upgrade a shallow clone to full history.

    Safe to re-run: an installed tap is reported as ALREADY_INSTALLED (or
    ALREADY_FULL when full history was requested and is present) without
    touching the filesystem. Asking for a different remote than the one the
    tap was installed from fails with REMOTE_MISMATCH and changes nothing.

    Process:
    1. Inspect local state (no side effects)
    2. Resolve candidate remotes (mirror first, canonical last)
    3. Clone with fallback, or unshallow, inside the interrupt scope
    4. Count formulae, update lock file, notify description cache

    Args:
        tap: Tap to install
        options: Clone target, depth and verbosity
        mirror: Optional mirror strategy (ignored with an explicit clone target)
        lock: Optional lock file manager
        description_cache: Optional description cache to notify

    Returns:
        InstallOutcome; failures carry an InstallErrorKind

    Raises:
        asyncio.CancelledError, KeyboardInterrupt: Re-raised after cleanup

    Example:
        >>> tap = Tap.parse("caskroom/cask", taps_root=Path("/usr/local/Library/Taps"))
        >>> outcome = await install_tap(tap, InstallOptions(full_clone=True))
        >>> print(outcome.status, outcome.formula_count)
    """
    options = options or InstallOptions()
    log = logger.debug if options.quiet else logger.info

    try:
        decision = await inspect_install_state(tap, options.clone_target, options.full_clone)
    except TapRemoteMismatchError as e:
        return _failure(tap, InstallErrorKind.REMOTE_MISMATCH, e.message)

    if decision is InstallDecision.ALREADY_INSTALLED:
        return InstallOutcome(
            status=InstallStatus.ALREADY_INSTALLED,
            tap=tap.full_name,
            path=tap.path,
            message=f"Tap {tap} is already tapped",
        )
    if decision is InstallDecision.ALREADY_FULL:
        return InstallOutcome(
            status=InstallStatus.ALREADY_FULL,
            tap=tap.full_name,
            path=tap.path,
            message=f"Tap {tap} is already a full clone",
        )

    plan = resolve_remotes(tap, options.clone_target, mirror)

    try:
        if decision is InstallDecision.PROCEED_UPGRADE:
            log(f"Unshallowing {tap}")
            async with cleanup_on_interrupt(tap.path):
                await unshallow(tap.path)
            remote = await recorded_remote(tap) or plan.canonical
            status = InstallStatus.UPGRADED
        else:
            log(f"Tapping {tap}")
            async with cleanup_on_interrupt(tap.path):
                used = await clone_with_fallback(
                    plan.candidates,
                    tap.path,
                    full_clone=options.full_clone,
                    canonical=plan.canonical,
                )
            logger.debug(f"Cloned {tap} from {used}")
            remote = plan.canonical
            status = InstallStatus.INSTALLED
    except TapCloneError as e:
        return _failure(tap, InstallErrorKind.CLONE_FAILED, e.message)
    except GitCommandError as e:
        message = f"Failed to {'unshallow' if decision is InstallDecision.PROCEED_UPGRADE else 'tap'} {tap}: {e.message}"
        if e.stderr:
            message = f"{message}\n{e.stderr.strip()}"
        return _failure(tap, InstallErrorKind.CLONE_FAILED, message)

    formulae = discover_formula_files(tap.path)
    log(f"Tapped {formulae.count} {pluralize_formula(formulae.count)} ({tap.path})")

    if lock is not None:
        lock.add_entry(
            name=tap.full_name,
            remote=remote,
            commit=await git_head_commit(tap.path),
            path=tap.path,
            depth=tap.depth.value if tap.depth else "unknown",
        )

    if description_cache is not None:
        try:
            description_cache.cache_formulae(formulae.names(tap))
        except Exception as e:
            logger.warning(f"Failed to cache formula descriptions for {tap}: {e}")

    return InstallOutcome(
        status=status,
        tap=tap.full_name,
        path=tap.path,
        remote=remote,
        formula_count=formulae.count,
    )


async def uninstall_tap(tap: Tap, lock: TapLock | None = None) -> None:
    """
    Remove an installed tap (the only way to change its remote).

    Process:
    1. Remove the clone, and the owner directory if left empty
    2. Remove lock entry and pinned flag (if lock provided)

    Args:
        tap: Tap to remove
        lock: Optional lock file manager

    Raises:
        TapNotInstalledError: If the tap is not installed
        TapError: If removal failed
    """
    if not tap.installed:
        raise TapNotInstalledError(
            f"No such tap: {tap}",
            context={"tap": tap.full_name, "path": str(tap.path)},
        )

    try:
        logger.info(f"Untapping {tap}")
        shutil.rmtree(tap.path)
        try:
            tap.path.parent.rmdir()
        except OSError:
            pass

        if lock is not None:
            lock.remove_entry(tap.full_name)
            lock.unpin(tap.full_name)
            logger.debug(f"Removed {tap} from lock file")

        logger.info(f"Untapped {tap}")

    except Exception as e:
        raise TapError(f"Failed to untap {tap}: {e}") from e
