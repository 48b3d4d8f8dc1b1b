"""Tests for shared-cache classification and group permissions."""

import os
import stat

import pytest

from gitcache.exceptions import SharedGroupNotFoundError
from gitcache.permissions import SHARED_UMASK, PermissionPolicy, is_under


@pytest.mark.short
@pytest.mark.parametrize(
    "path, root, expected",
    [
        ("/var/cache/git-cache", "/var/cache/git-cache", True),
        ("/var/cache/git-cache/store", "/var/cache/git-cache", True),
        ("/var/cache/git-cache/", "/var/cache/git-cache", True),
        ("/var/cache/git-cache-old", "/var/cache/git-cache", False),
        ("/var/cache/git-cache/../other", "/var/cache/git-cache", False),
        ("/home/user/.cache/git-cache", "/var/cache/git-cache", False),
    ],
)
def test_is_under(path, root, expected):
    assert is_under(path, root) is expected


@pytest.mark.short
def test_is_shared_uses_root_table():
    policy = PermissionPolicy(system_roots=["/var/cache/git", "/cache/git"], group="g")

    assert policy.is_shared("/cache/git/mirror")
    assert policy.is_shared("/var/cache/git")
    assert not policy.is_shared("/tmp/c")


@pytest.mark.short
def test_apply_umask_for_shared_cache(shared_root, policy, restore_umask):
    os.umask(0o077)
    policy.apply_umask(shared_root / "store")

    assert os.umask(0o077) == SHARED_UMASK


@pytest.mark.short
def test_apply_umask_leaves_private_cache_alone(tmp_path, policy, restore_umask):
    os.umask(0o077)
    policy.apply_umask(tmp_path / "private")

    assert os.umask(0o077) == 0o077


@pytest.mark.short
def test_fix_ownership_grants_group_write(shared_root, policy, restore_umask):
    os.umask(0o077)
    store = shared_root / "store"
    (store / "objects").mkdir(parents=True)
    (store / "config").write_text("[core]\n")

    policy.fix_ownership(store)

    for path in (store, store / "objects"):
        mode = path.stat().st_mode
        assert mode & stat.S_IRGRP and mode & stat.S_IWGRP
        assert mode & stat.S_ISGID
    config_mode = (store / "config").stat().st_mode
    assert config_mode & stat.S_IRGRP and config_mode & stat.S_IWGRP
    assert (store / "config").stat().st_gid == os.getgid()


@pytest.mark.short
def test_fix_ownership_skips_private_cache(tmp_path, policy, restore_umask):
    os.umask(0o077)
    store = tmp_path / "private"
    store.mkdir()

    policy.fix_ownership(store)

    assert not store.stat().st_mode & stat.S_IWGRP


@pytest.mark.short
def test_check_group_missing_for_shared_cache(shared_root):
    policy = PermissionPolicy([str(shared_root)], group="git-cache-no-such-group")

    with pytest.raises(SharedGroupNotFoundError) as excinfo:
        policy.check_group(shared_root / "store")
    assert excinfo.value.group == "git-cache-no-such-group"


@pytest.mark.short
def test_check_group_ignores_private_cache(tmp_path, shared_root):
    policy = PermissionPolicy([str(shared_root)], group="git-cache-no-such-group")

    policy.check_group(tmp_path / "private")


@pytest.mark.short
def test_check_group_existing(shared_root, policy):
    policy.check_group(shared_root / "store")
