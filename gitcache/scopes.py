"""
Layered storage of the cache location in git configuration.

The cache directory lives under the `cache.directory` key in one of git's
configuration scopes. Lookups follow git's own precedence, closest scope
first: local (repository), then global (user), then system.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

from git import Git
from git.exc import GitCommandError

from gitcache.config import CACHE_DIRECTORY_KEY
from gitcache.exceptions import CacheNotFoundError

logger = logging.getLogger(__name__)

SYSTEM = "system"
GLOBAL = "global"
LOCAL = "local"

SCOPES = (SYSTEM, GLOBAL, LOCAL)

# Closest scope wins
RESOLVE_ORDER = (LOCAL, GLOBAL, SYSTEM)


def _check_scope(scope: str) -> None:
    if scope not in SCOPES:
        raise ValueError(f"Unknown configuration scope '{scope}'")


class ScopeConfigStore(ABC):
    """Read and write configuration keys under an explicit scope."""

    @abstractmethod
    def get(self, scope: str, key: str) -> Optional[str]:
        """Value of `key` in exactly `scope`, or None when unset."""

    @abstractmethod
    def set(self, scope: str, key: str, value: str) -> None:
        """Write `key` under exactly `scope`."""

    @abstractmethod
    def unset(self, scope: str, key: str) -> None:
        """Remove `key` from exactly `scope`."""

    def lookup(self, key: str, order: Iterable[str] = RESOLVE_ORDER) -> Optional[str]:
        for scope in order:
            value = self.get(scope, key)
            if value:
                return value
        return None

    def resolve(self) -> Path:
        """
        Resolve the configured cache directory.

        Returns:
            Path of an existing directory

        Raises:
            CacheNotFoundError: if nothing is configured or the configured
                path is not an existing directory
        """
        value = self.lookup(CACHE_DIRECTORY_KEY)
        if not value:
            raise CacheNotFoundError()

        path = Path(value).expanduser()
        if not path.is_dir():
            raise CacheNotFoundError(str(path), "directory does not exist")
        return path

    def persist(self, scope: Optional[str], path: Path) -> None:
        """Record `path` as the cache directory under `scope` (default: global)."""
        scope = scope or GLOBAL
        logger.debug(f"Setting {CACHE_DIRECTORY_KEY}={path} in {scope} config")
        self.set(scope, CACHE_DIRECTORY_KEY, str(path))


class GitConfigStore(ScopeConfigStore):
    """Configuration store backed by `git config`."""

    def __init__(self, working_dir: Optional[Path] = None):
        self.git = Git(str(working_dir) if working_dir else None)

    def get(self, scope: str, key: str) -> Optional[str]:
        _check_scope(scope)
        return self._get(f"--{scope}", "--get", key)

    def set(self, scope: str, key: str, value: str) -> None:
        _check_scope(scope)
        self.git.config(f"--{scope}", key, value)

    def unset(self, scope: str, key: str) -> None:
        _check_scope(scope)
        self.git.config(f"--{scope}", "--unset", key)

    def lookup(self, key: str, order: Iterable[str] = RESOLVE_ORDER) -> Optional[str]:
        if tuple(order) == RESOLVE_ORDER:
            # git applies the same precedence natively, and knows whether
            # the working directory is inside a repository
            return self._get("--get", key)
        return super().lookup(key, order)

    def _get(self, *args: str) -> Optional[str]:
        try:
            value = self.git.config(*args)
        except GitCommandError as e:
            # git config exits with 1 when the key is not set
            if e.status == 1:
                return None
            raise
        return value or None


class MemoryConfigStore(ScopeConfigStore):
    """In-memory configuration store, used in place of git config in tests."""

    def __init__(self, values: Optional[Dict[Tuple[str, str], str]] = None):
        self.values: Dict[Tuple[str, str], str] = dict(values or {})

    def get(self, scope: str, key: str) -> Optional[str]:
        _check_scope(scope)
        return self.values.get((scope, key))

    def set(self, scope: str, key: str, value: str) -> None:
        _check_scope(scope)
        self.values[(scope, key)] = value

    def unset(self, scope: str, key: str) -> None:
        _check_scope(scope)
        self.values.pop((scope, key), None)
