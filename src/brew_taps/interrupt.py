"""Interrupt-safe scope around a clone.

A tap is never partially visible: if a clone is cancelled, or git dies
abnormally, the directory it was creating is removed before the original
exception continues upward.
"""

import asyncio
import logging
import shutil
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from .exceptions import GitCommandError

logger = logging.getLogger(__name__)

# Backoff between removal attempts, for helpers still releasing file handles.
REMOVAL_BACKOFF = (0.1, 0.2, 0.4)


def _rmdir_if_empty(path: Path) -> None:
    try:
        path.rmdir()
    except OSError:
        pass


async def remove_partial_clone(target: Path, backoff: tuple[float, ...] = REMOVAL_BACKOFF) -> bool:
    """Best-effort removal of ``target`` and of its parent when left empty.

    Retries with the given backoff delays. Never raises.

    Returns:
        True if the target is gone afterwards
    """
    delays = (0.0, *backoff)
    for attempt, delay in enumerate(delays, start=1):
        if delay:
            await asyncio.sleep(delay)
        if not target.exists():
            break
        try:
            shutil.rmtree(target)
        except OSError as e:
            logger.debug(f"Removal attempt {attempt} of {target} failed: {e}")

    removed = not target.exists()
    if removed:
        _rmdir_if_empty(target.parent)
    else:
        logger.debug(f"Giving up on removing {target}")
    return removed


@asynccontextmanager
async def cleanup_on_interrupt(target: Path) -> AsyncIterator[None]:
    """Remove a created-then-aborted ``target`` and re-raise the interruption.

    Only a directory that did not exist when the scope was entered is removed,
    so an interrupted upgrade of an existing tap leaves that tap in place.

    Example:
        >>> async with cleanup_on_interrupt(tap.path):
        ...     await clone_with_fallback(plan.candidates, tap.path, full_clone=False)
    """
    created_here = not target.exists()
    try:
        yield
    except (asyncio.CancelledError, KeyboardInterrupt, GitCommandError) as e:
        logger.debug(f"Clone into {target} aborted ({type(e).__name__})")
        if created_here:
            await remove_partial_clone(target)
        raise
