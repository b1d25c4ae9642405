"""Async git subprocess layer.

Uses asyncio.create_subprocess_exec (never a shell) with the child in its own
session so a cancelled caller can kill git together with its helpers
(git-remote-https, ssh, ...).
"""

import asyncio
import logging
import os
import shutil
import signal
from dataclasses import dataclass
from pathlib import Path

from .exceptions import GitCommandError
from .exceptions import TapError

logger = logging.getLogger(__name__)

_OUTPUT_LIMIT = 2000


@dataclass(frozen=True)
class GitResult:
    """Outcome of one git invocation."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def require_git() -> str:
    """Return the git executable path.

    Raises:
        TapError: If git is not on PATH
    """
    git = shutil.which("git")
    if git is None:
        raise TapError("git is required to install taps but was not found on PATH")
    return git


def _kill_group(proc: asyncio.subprocess.Process) -> None:
    try:
        os.killpg(os.getpgid(proc.pid), signal.SIGKILL)
    except (ProcessLookupError, OSError):
        try:
            proc.kill()
        except ProcessLookupError:
            pass


async def run_git(args: list[str], cwd: Path | None = None) -> GitResult:
    """Run git with the given arguments and return its result.

    A non-zero exit is reported through GitResult, not raised. If the awaiting
    task is cancelled the whole git process group is killed and reaped before
    the cancellation propagates.
    """
    cmd = [require_git(), *args]
    env = dict(os.environ)
    env["GIT_TERMINAL_PROMPT"] = "0"

    logger.debug(f"Running: {' '.join(cmd)}")
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=str(cwd) if cwd else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        env=env,
        start_new_session=True,
    )
    try:
        stdout_bytes, stderr_bytes = await proc.communicate()
    except BaseException:
        _kill_group(proc)
        await asyncio.shield(proc.wait())
        raise

    result = GitResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout_bytes.decode(errors="replace")[:_OUTPUT_LIMIT],
        stderr=stderr_bytes.decode(errors="replace")[:_OUTPUT_LIMIT],
    )
    if not result.ok:
        logger.debug(f"git {args[0]} exited with {result.returncode}: {result.stderr.strip()}")
    return result


def _check(result: GitResult, args: list[str]) -> GitResult:
    if not result.ok:
        raise GitCommandError(
            f"git {' '.join(args)} failed with exit code {result.returncode}",
            returncode=result.returncode,
            stderr=result.stderr,
            context={"args": args},
        )
    return result


async def git_clone(remote: str, target: Path, *, full_clone: bool) -> GitResult:
    """Clone ``remote`` into ``target``; shallow (depth 1) unless ``full_clone``.

    An ordinary non-zero exit is returned so callers can fall back to another
    remote. A signal-terminated git is abnormal and raised as GitCommandError.
    """
    args = ["clone"]
    if not full_clone:
        args.append("--depth=1")
    args += [remote, str(target)]
    result = await run_git(args)
    if result.returncode < 0:
        _check(result, args)
    return result


async def git_add_remote(repo: Path, name: str, url: str) -> None:
    args = [f"--git-dir={repo / '.git'}", "remote", "add", name, url]
    _check(await run_git(args), args)


async def git_remote_url(repo: Path, name: str = "origin") -> str | None:
    """Return the configured URL of a remote, or None when it is not set."""
    result = await run_git(["config", "--get", f"remote.{name}.url"], cwd=repo)
    if not result.ok:
        return None
    return result.stdout.strip() or None


async def git_fetch_unshallow(repo: Path) -> None:
    """Complete the history of a shallow clone in place."""
    args = ["fetch", "--unshallow"]
    _check(await run_git(args, cwd=repo), args)


async def git_head_commit(repo: Path) -> str | None:
    result = await run_git(["rev-parse", "HEAD"], cwd=repo)
    if not result.ok:
        return None
    return result.stdout.strip() or None
