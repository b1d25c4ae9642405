"""Tests for TapRegistry with injected taps root."""

import pytest
from brew_taps import TapInvalidNameError
from brew_taps import TapLock
from brew_taps import TapRegistry


def _fake_install(taps_root, owner, repo):
    (taps_root / owner / repo / ".git").mkdir(parents=True)


def test_fetch_uses_injected_root(taps_root):
    registry = TapRegistry(taps_root)

    tap = registry.fetch("Caskroom", "homebrew-cask")

    assert tap.full_name == "caskroom/cask"
    assert tap.path == taps_root / "caskroom" / "homebrew-cask"
    assert not tap.installed
    assert not tap.pinned


def test_fetch_name_invalid(taps_root):
    with pytest.raises(TapInvalidNameError):
        TapRegistry(taps_root).fetch_name("not-a-tap")


def test_list_installed(taps_root):
    """Test only directories with git metadata are listed."""
    _fake_install(taps_root, "foo", "homebrew-bar")
    _fake_install(taps_root, "abc", "homebrew-def")
    (taps_root / "foo" / "homebrew-empty").mkdir()
    (taps_root / "foo" / "unrelated" / ".git").mkdir(parents=True)

    registry = TapRegistry(taps_root)

    assert registry.names() == ["abc/def", "foo/bar"]
    assert all(tap.installed for tap in registry.list_installed())


def test_list_installed_missing_root(tmp_path):
    assert TapRegistry(tmp_path / "missing").list_installed() == []


def test_pinned_from_lock(taps_root, tmp_path):
    lock = TapLock(lock_path=tmp_path / "taps.lock")
    lock.pin("foo/bar")
    _fake_install(taps_root, "foo", "homebrew-bar")
    registry = TapRegistry(taps_root, lock=lock)

    assert registry.fetch_name("foo/bar").pinned
    assert not registry.fetch_name("abc/def").pinned
    assert registry.list_pinned() == ["foo/bar"]
    assert [tap.pinned for tap in registry.list_installed()] == [True]


def test_list_pinned_without_lock(taps_root):
    assert TapRegistry(taps_root).list_pinned() == []
