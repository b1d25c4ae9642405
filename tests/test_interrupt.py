"""Tests for interrupt cleanup around clones."""

import asyncio

import pytest
from brew_taps import GitCommandError
from brew_taps import TapCloneError
from brew_taps.interrupt import cleanup_on_interrupt
from brew_taps.interrupt import remove_partial_clone


def _half_clone(target):
    (target / ".git").mkdir(parents=True)
    (target / ".git" / "HEAD").write_text("ref: refs/heads/main\n")


@pytest.mark.asyncio
@pytest.mark.parametrize("interruption", [asyncio.CancelledError, KeyboardInterrupt])
async def test_interruption_removes_created_directory(tmp_path, interruption):
    """Test cancelled clone leaves neither the target nor an empty owner dir."""
    target = tmp_path / "Taps" / "foo" / "homebrew-bar"

    with pytest.raises(interruption):
        async with cleanup_on_interrupt(target):
            _half_clone(target)
            raise interruption()

    assert not target.exists()
    assert not target.parent.exists()
    assert (tmp_path / "Taps").exists()


@pytest.mark.asyncio
async def test_abnormal_git_failure_removes_created_directory(tmp_path):
    target = tmp_path / "foo" / "homebrew-bar"

    with pytest.raises(GitCommandError) as exc_info:
        async with cleanup_on_interrupt(target):
            _half_clone(target)
            raise GitCommandError("git clone killed", returncode=-9)

    assert exc_info.value.signaled
    assert not target.exists()


@pytest.mark.asyncio
async def test_parent_with_other_taps_is_kept(tmp_path):
    target = tmp_path / "foo" / "homebrew-bar"
    sibling = tmp_path / "foo" / "homebrew-other"
    sibling.mkdir(parents=True)

    with pytest.raises(asyncio.CancelledError):
        async with cleanup_on_interrupt(target):
            _half_clone(target)
            raise asyncio.CancelledError()

    assert not target.exists()
    assert sibling.exists()


@pytest.mark.asyncio
async def test_existing_directory_is_never_removed(tmp_path):
    """Test an interrupted upgrade keeps the already-installed tap."""
    target = tmp_path / "foo" / "homebrew-bar"
    _half_clone(target)

    with pytest.raises(asyncio.CancelledError):
        async with cleanup_on_interrupt(target):
            raise asyncio.CancelledError()

    assert (target / ".git" / "HEAD").exists()


@pytest.mark.asyncio
async def test_ordinary_errors_pass_through_untouched(tmp_path):
    target = tmp_path / "foo" / "homebrew-bar"

    with pytest.raises(TapCloneError):
        async with cleanup_on_interrupt(target):
            _half_clone(target)
            raise TapCloneError("nope")

    assert target.exists()


@pytest.mark.asyncio
async def test_normal_completion(tmp_path):
    target = tmp_path / "foo" / "homebrew-bar"

    async with cleanup_on_interrupt(target):
        _half_clone(target)

    assert target.exists()


@pytest.mark.asyncio
async def test_remove_partial_clone_failure_is_ignored(tmp_path, monkeypatch):
    """Test removal errors are retried and then swallowed."""
    target = tmp_path / "foo" / "homebrew-bar"
    _half_clone(target)
    calls = []

    def failing_rmtree(path):
        calls.append(path)
        raise PermissionError("busy")

    monkeypatch.setattr("brew_taps.interrupt.shutil.rmtree", failing_rmtree)

    assert await remove_partial_clone(target, backoff=(0.01, 0.01, 0.01)) is False
    assert len(calls) == 4
    assert target.exists()


@pytest.mark.asyncio
async def test_removal_backoff_does_not_block_the_loop(tmp_path, monkeypatch):
    """Test other tasks keep running while cleanup waits between attempts."""
    target = tmp_path / "foo" / "homebrew-bar"
    ticks = 0

    def failing_rmtree(path):
        raise PermissionError("busy")

    async def ticker():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.01)
            ticks += 1

    monkeypatch.setattr("brew_taps.interrupt.shutil.rmtree", failing_rmtree)
    ticking = asyncio.create_task(ticker())
    try:
        with pytest.raises(asyncio.CancelledError):
            async with cleanup_on_interrupt(target):
                _half_clone(target)
                raise asyncio.CancelledError()
    finally:
        ticking.cancel()

    assert ticks >= 10


@pytest.mark.asyncio
async def test_remove_partial_clone_missing_target(tmp_path):
    assert await remove_partial_clone(tmp_path / "missing" / "target") is True
