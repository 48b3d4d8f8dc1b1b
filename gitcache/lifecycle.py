"""
Creation, lookup and removal of the shared cache store.

State machine of a cache directory:

    Uninitialized --init()--> Initialized --delete()--> Deleted

init() on an Initialized directory is rejected with AlreadyInitializedError,
and every operation that needs the store goes through open(), which rejects
anything that is not an Initialized store.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional, Union

from gitcache.config import CACHE_DIRECTORY_KEY, get_user_cache_dir
from gitcache.engine import GitEngine, RepositoryEngine
from gitcache.exceptions import (
    AlreadyInitializedError,
    CacheNotFoundError,
    ConfirmationRequiredError,
    MissingArgumentError,
    UnrecognizedScopeError,
)
from gitcache.models import CacheDirectory, CacheState
from gitcache.permissions import PermissionPolicy
from gitcache.scopes import GLOBAL, LOCAL, SYSTEM, GitConfigStore, ScopeConfigStore

logger = logging.getLogger(__name__)

# Cache type tokens accepted by `init`, and the configuration scope each maps to.
# A "global" cache is shared by every user of the host, so it is recorded in
# the system scope; a "local" cache belongs to the invoking user.
TYPE_SCOPES = {
    "global": SYSTEM,
    "local": GLOBAL,
}

# Scopes swept by delete()
DELETE_SCOPES = (SYSTEM, GLOBAL)


def scope_for_type(cache_type: Optional[str]) -> str:
    if not cache_type:
        return GLOBAL
    try:
        return TYPE_SCOPES[cache_type]
    except KeyError:
        raise UnrecognizedScopeError(cache_type)


def expand_path(raw: Union[str, Path]) -> Path:
    """
    Turn a user-supplied directory into an absolute path.

    Paths starting with "/" or "~" are taken as given (with "~" expanded);
    anything else is relative to the current working directory.
    """
    raw = str(raw)
    if raw.startswith("/") or raw.startswith("~"):
        return Path(raw).expanduser()
    return Path(os.path.abspath(os.path.join(os.getcwd(), raw)))


def is_writable(path: Union[str, Path]) -> bool:
    """True if `path` could be created or written by this process."""
    candidate = Path(path)
    while not candidate.exists():
        if candidate.parent == candidate:
            return False
        candidate = candidate.parent
    return candidate.is_dir() and os.access(candidate, os.W_OK | os.X_OK)


class CacheLifecycle:
    def __init__(
        self,
        config_store: Optional[ScopeConfigStore] = None,
        engine: Optional[RepositoryEngine] = None,
        policy: Optional[PermissionPolicy] = None,
    ):
        self.config_store = config_store or GitConfigStore()
        self.engine = engine or GitEngine()
        self.policy = policy or PermissionPolicy()

    def default_path(self, scope: str) -> Optional[Path]:
        """
        Default cache location for a scope.

        The user scope always has one. The system scope uses the first
        writable well-known root, and has no default when none is writable.
        """
        if scope != SYSTEM:
            return get_user_cache_dir()
        for root in self.policy.system_roots:
            if is_writable(root):
                return Path(root)
        return None

    def create(
        self,
        path: Optional[Union[str, Path]] = None,
        cache_type: Optional[str] = None,
    ) -> CacheDirectory:
        """
        Create a cache store and record it in git configuration.

        Args:
            path: Cache directory. Defaults to the scope's default location.
            cache_type: "local" (per user, the default) or "global" (shared
                by all users of the host).

        Returns:
            The initialized CacheDirectory

        Raises:
            UnrecognizedScopeError: for any other cache type
            MissingArgumentError: if no path is given and no default exists
            AlreadyInitializedError: if the directory already holds a store
        """
        scope = scope_for_type(cache_type)

        if path:
            resolved = expand_path(path)
        else:
            resolved = self.default_path(scope)
            if resolved is None:
                raise MissingArgumentError(
                    "DIR",
                    "No writable system cache directory found among "
                    f"{', '.join(self.policy.system_roots)}",
                )

        self.policy.check_group(resolved)
        self.policy.apply_umask(resolved)
        cache = self.init(resolved)
        cache.scope = scope
        self.config_store.persist(scope, resolved)
        logger.info(f"Initialized git cache in {resolved} ({scope} config)")
        return cache

    def init(self, path: Optional[Union[str, Path]]) -> CacheDirectory:
        """Create `path` and make it a bare repository. One-shot per directory."""
        if not path:
            raise MissingArgumentError("DIR")

        cache = CacheDirectory(Path(path), scope=GLOBAL)
        if cache.is_valid():
            raise AlreadyInitializedError(str(cache.path))

        self.policy.check_group(cache.path)
        existed = cache.path.exists()
        cache.path.mkdir(parents=True, exist_ok=True)
        try:
            self.engine.init_bare(cache.path)
            self.policy.fix_ownership(cache.path)
        except Exception:
            # Leave nothing behind that looks like a store
            if existed:
                cache.marker.unlink(missing_ok=True)
            else:
                shutil.rmtree(cache.path, ignore_errors=True)
            raise

        cache.state = CacheState.INITIALIZED
        return cache

    def delete(self, force: bool = False) -> List[CacheDirectory]:
        """
        Remove the cache of every scope that has one configured.

        Both the system and the global scope are swept. For each, the
        configuration key is removed before the directory.

        Returns:
            The caches that were cleared, in the Deleted state; possibly none
        """
        if not force:
            raise ConfirmationRequiredError("delete the git cache")

        cleared = []
        for scope in DELETE_SCOPES:
            value = self.config_store.get(scope, CACHE_DIRECTORY_KEY)
            if not value:
                continue

            self.config_store.unset(scope, CACHE_DIRECTORY_KEY)
            path = Path(value).expanduser()
            if path.exists():
                shutil.rmtree(path)
            logger.info(f"Deleted {scope} git cache {path}")
            cleared.append(CacheDirectory(path, scope, CacheState.DELETED))

        if not cleared:
            logger.info("No git cache configured, nothing to delete")
        return cleared

    def locate(self) -> Path:
        """Path of the configured cache directory, which must exist."""
        path = self.config_store.resolve()
        if not path.is_dir():
            raise CacheNotFoundError(str(path), "directory does not exist")
        return path

    def open(self) -> CacheDirectory:
        """
        The configured store, verified to be an initialized bare repository.

        Every operation that writes to the store opens it through here, so a
        shared store gets the group-writable umask before git touches it.

        Raises:
            CacheNotFoundError: if no store is configured, or the configured
                directory is not a store
        """
        path = self.locate()
        cache = CacheDirectory(path, scope=self._scope_of(path))
        if not cache.is_valid():
            raise CacheNotFoundError(str(path), "not a bare git repository")
        cache.state = CacheState.INITIALIZED
        self.policy.apply_umask(cache.path)
        return cache

    def _scope_of(self, path: Path) -> str:
        for scope in (GLOBAL, SYSTEM):
            value = self.config_store.get(scope, CACHE_DIRECTORY_KEY)
            if value and Path(value).expanduser() == path:
                return scope
        return LOCAL
