"""Tests for remote resolution."""

from pathlib import Path

from brew_taps import MirrorStrategy
from brew_taps import Tap
from brew_taps import TemplateMirror
from brew_taps import default_remote
from brew_taps import resolve_remotes
from brew_taps.remotes import normalize_remote
from brew_taps.remotes import same_remote


def _tap() -> Tap:
    return Tap.parse("caskroom/cask", taps_root=Path("/taps"))


def test_default_remote():
    """Test the GitHub naming convention."""
    assert default_remote(_tap()) == "https://github.com/caskroom/homebrew-cask"


def test_default_remote_custom_host():
    """Test a different host keeps the owner/prefix layout."""
    assert default_remote(_tap(), host="https://git.example.com/") == "https://git.example.com/caskroom/homebrew-cask"


def test_explicit_target_is_sole_candidate():
    """Test an explicit URL is used verbatim and disables the mirror."""
    plan = resolve_remotes(_tap(), "ssh://git@host/cask.git", mirror=TemplateMirror("git@mirror:{owner}-{name}"))

    assert plan.canonical == "ssh://git@host/cask.git"
    assert plan.candidates == ["ssh://git@host/cask.git"]


def test_no_mirror():
    """Test default resolution without a mirror."""
    plan = resolve_remotes(_tap())

    assert plan.candidates == [plan.canonical]
    assert plan.primary == "https://github.com/caskroom/homebrew-cask"


def test_mirror_tried_first():
    """Test the mirror precedes the canonical remote."""
    mirror = TemplateMirror("git@github.com:me/homebrew-{owner}-{name}")

    plan = resolve_remotes(_tap(), mirror=mirror)

    assert plan.candidates == [
        "git@github.com:me/homebrew-caskroom-cask",
        "https://github.com/caskroom/homebrew-cask",
    ]
    assert plan.canonical == "https://github.com/caskroom/homebrew-cask"


def test_mirror_declining():
    """Test a strategy returning None leaves only the canonical remote."""

    class NoMirror:
        def mirror_for(self, tap):
            return None

    assert isinstance(NoMirror(), MirrorStrategy)
    assert resolve_remotes(_tap(), mirror=NoMirror()).candidates == ["https://github.com/caskroom/homebrew-cask"]


def test_mirror_equal_to_canonical_is_not_duplicated():
    """Test a mirror naming the canonical repository is ignored."""
    mirror = TemplateMirror("https://github.com/{owner}/{repo}.git")

    assert resolve_remotes(_tap(), mirror=mirror).candidates == ["https://github.com/caskroom/homebrew-cask"]


def test_normalize_remote():
    """Test trailing slash and .git suffix are ignored."""
    assert normalize_remote("https://host/a/b.git/") == "https://host/a/b"
    assert same_remote("https://host/a/b", "https://host/a/b.git")
    assert not same_remote("https://host/a/b", "https://host/a/c")
