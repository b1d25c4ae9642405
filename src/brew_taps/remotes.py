"""Remote resolution - which URLs to clone a tap from.

The canonical remote is the logical origin of a tap and the value used for
mismatch checks. A mirror is only a faster or alternate transport tried
first; it never replaces the canonical remote in the tap's identity.
"""

import logging
from dataclasses import dataclass

from .protocols import MirrorStrategy
from .tap import Tap

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://github.com"

UPSTREAM_REMOTE = "upstream"


def default_remote(tap: Tap, host: str = DEFAULT_HOST) -> str:
    """Canonical clone URL for a tap: ``<host>/<owner>/homebrew-<name>``."""
    return f"{host.rstrip('/')}/{tap.owner}/{tap.repo_name}"


def normalize_remote(url: str) -> str:
    """Normalize a remote URL for equality checks.

    Trailing slashes and a ``.git`` suffix do not change which repository a
    URL names.
    """
    url = url.strip().rstrip("/")
    if url.endswith(".git"):
        url = url[: -len(".git")]
    return url


def same_remote(a: str, b: str) -> bool:
    return normalize_remote(a) == normalize_remote(b)


class TemplateMirror:
    """Mirror strategy that formats a URL template with the tap's identity.

    Example:
        >>> mirror = TemplateMirror("git@github.com:me/homebrew-{owner}-{name}")
        >>> mirror.mirror_for(tap)
        'git@github.com:me/homebrew-caskroom-cask'
    """

    def __init__(self, template: str):
        self.template = template

    def mirror_for(self, tap: Tap) -> str | None:
        return self.template.format(owner=tap.owner, name=tap.name, repo=tap.repo_name)


@dataclass(frozen=True)
class RemotePlan:
    """Ordered clone candidates plus the canonical remote they stand for."""

    canonical: str
    candidates: list[str]

    @property
    def primary(self) -> str:
        return self.candidates[0]


def resolve_remotes(
    tap: Tap,
    clone_target: str | None = None,
    mirror: MirrorStrategy | None = None,
) -> RemotePlan:
    """Work out the canonical remote and the candidates to try, in order.

    Args:
        tap: Tap being installed
        clone_target: Explicit URL; used verbatim as the only candidate
        mirror: Optional mirror strategy, consulted only without an explicit URL

    Returns:
        RemotePlan whose candidates start with the mirror (if any) and end
        with the canonical remote
    """
    if clone_target:
        return RemotePlan(canonical=clone_target, candidates=[clone_target])

    canonical = default_remote(tap)
    if mirror is None:
        return RemotePlan(canonical=canonical, candidates=[canonical])

    mirror_url = mirror.mirror_for(tap)
    if not mirror_url or same_remote(mirror_url, canonical):
        return RemotePlan(canonical=canonical, candidates=[canonical])

    logger.debug(f"Preferring mirror {mirror_url} for {tap}")
    return RemotePlan(canonical=canonical, candidates=[mirror_url, canonical])
