import grp
import io
import logging
import os

import pytest

from gitcache.lifecycle import CacheLifecycle
from gitcache.permissions import PermissionPolicy
from gitcache.scopes import MemoryConfigStore

from .fixtures import FakeEngine


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gitcache")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture
def restore_umask():
    """Put the process umask back after tests that change it."""
    old = os.umask(0o022)
    os.umask(old)
    yield old
    os.umask(old)


@pytest.fixture
def own_group() -> str:
    return grp.getgrgid(os.getgid()).gr_name


@pytest.fixture
def shared_root(tmp_path):
    return tmp_path / "shared"


@pytest.fixture
def config_store():
    return MemoryConfigStore()


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def policy(shared_root, own_group):
    return PermissionPolicy(system_roots=[str(shared_root)], group=own_group)


@pytest.fixture
def lifecycle(config_store, engine, policy):
    return CacheLifecycle(config_store=config_store, engine=engine, policy=policy)


@pytest.fixture
def cache(lifecycle, tmp_path):
    """An initialized per-user cache."""
    return lifecycle.create(tmp_path / "cache", "local")


@pytest.fixture
def isolated_git_config(tmp_path, monkeypatch):
    """Point git's global and system configuration at files under tmp_path."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.delenv("GIT_CONFIG_GLOBAL", raising=False)
    monkeypatch.delenv("GIT_CONFIG_NOSYSTEM", raising=False)
    (home / ".gitconfig").write_text("")
    system_config = tmp_path / "gitconfig-system"
    system_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_SYSTEM", str(system_config))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return home
