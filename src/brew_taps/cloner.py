"""Clone execution with ordered remote fallback."""

import logging
from pathlib import Path

from .exceptions import TapCloneError
from .git import git_add_remote
from .git import git_clone
from .git import git_fetch_unshallow
from .interrupt import remove_partial_clone
from .remotes import UPSTREAM_REMOTE
from .remotes import normalize_remote

logger = logging.getLogger(__name__)


async def clone_with_fallback(
    candidates: list[str],
    target: Path,
    *,
    full_clone: bool,
    canonical: str | None = None,
) -> str:
    """Clone the first candidate remote that works into ``target``.

    Candidates are tried in order. An ordinary git failure moves on to the next
    candidate; anything else (cancellation, git killed by a signal) propagates
    untouched for the caller's interrupt scope to handle.

    When more than one distinct remote was in play (a mirror plus the
    canonical remote), the canonical URL is added to the new clone as the
    ``upstream`` remote, whichever candidate won, so the tap's logical origin
    stays traceable.

    Args:
        candidates: Remotes to try, most preferred first
        target: Clone destination (absent, or an empty directory)
        full_clone: Clone complete history instead of depth 1
        canonical: Logical origin of the tap (defaults to the last candidate)

    Returns:
        The remote the clone was made from

    Raises:
        TapCloneError: If every candidate failed, or target holds unrelated files
    """
    if not candidates:
        raise TapCloneError(f"No remotes to clone {target} from", context={"target": str(target)})

    canonical = canonical or candidates[-1]
    record_upstream = len({normalize_remote(remote) for remote in [*candidates, canonical]}) > 1

    existed = target.exists()
    if existed and any(target.iterdir()):
        raise TapCloneError(
            f"Cannot clone into {target}: directory exists and is not an installed tap",
            context={"target": str(target)},
        )

    errors: dict[str, str] = {}

    for remote in candidates:
        if not existed and target.exists():
            await remove_partial_clone(target, backoff=())

        logger.debug(f"Cloning {remote} into {target} ({'full' if full_clone else 'shallow'})")
        result = await git_clone(remote, target, full_clone=full_clone)
        if result.ok:
            if record_upstream:
                await git_add_remote(target, UPSTREAM_REMOTE, canonical)
                logger.debug(f"Recorded {canonical} as {UPSTREAM_REMOTE} of {target}")
            return remote

        errors[remote] = result.stderr.strip()
        logger.debug(f"Clone from {remote} failed, {len(candidates) - len(errors)} candidate(s) left")

    # git may have created the owner directory on the way
    if not existed:
        await remove_partial_clone(target, backoff=())

    details = "\n".join(f"  {remote}: {err or 'unknown error'}" for remote, err in errors.items())
    raise TapCloneError(
        f"Failed to clone {target.name} from any remote:\n{details}",
        context={"target": str(target), "remotes": list(errors)},
    )


async def unshallow(path: Path) -> None:
    """Fetch the complete history into an existing shallow clone."""
    logger.debug(f"Unshallowing {path}")
    await git_fetch_unshallow(path)
