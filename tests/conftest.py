"""Shared test fixtures: throwaway git repositories standing in for tap remotes."""

import shutil
import subprocess
from pathlib import Path

import pytest

GIT_IDENTITY = ["-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false"]


def git(*args: str, cwd: Path | None = None) -> str:
    result = subprocess.run(
        ["git", *GIT_IDENTITY, *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


def snapshot(root: Path) -> list[tuple[str, int, int]]:
    """Every path under root with its mtime and size, for no-mutation checks."""
    if not root.exists():
        return []
    entries = []
    for path in sorted(root.rglob("*")):
        stat = path.lstat()
        entries.append((str(path.relative_to(root)), stat.st_mtime_ns, stat.st_size))
    return entries


@pytest.fixture
def taps_root(tmp_path: Path) -> Path:
    return tmp_path / "Taps"


@pytest.fixture
def git_available() -> None:
    if shutil.which("git") is None:
        pytest.skip("git not installed")


@pytest.fixture
def make_remote(tmp_path: Path, git_available):
    """Factory creating a local repository with formulae; returns its file:// URL.

    Each repository gets two commits so shallow and full clones differ.
    """
    remotes_dir = tmp_path / "remotes"

    def _make(name: str = "homebrew-tools", formulae: tuple[str, ...] = ("foo", "bar")) -> str:
        repo = remotes_dir / name
        (repo / "Formula").mkdir(parents=True)
        git("init", "-q", str(repo))
        (repo / "README.md").write_text(f"# {name}\n")
        git("add", "README.md", cwd=repo)
        git("commit", "-q", "-m", "Initial commit", cwd=repo)
        for formula in formulae:
            (repo / "Formula" / f"{formula}.rb").write_text(f"class {formula.capitalize()} < Formula\nend\n")
        git("add", "-A", cwd=repo)
        git("commit", "-q", "-m", "Add formulae", cwd=repo)
        return repo.as_uri()

    return _make
