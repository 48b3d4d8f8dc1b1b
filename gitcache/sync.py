"""Bulk refresh of every source registered in the cache"""

import logging
from typing import Optional

from gitcache.engine import GitEngine, RepositoryEngine
from gitcache.models import CacheDirectory

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    def __init__(self, cache: CacheDirectory, engine: Optional[RepositoryEngine] = None):
        self.cache = cache
        self.engine = engine or GitEngine()

    def update_all(self) -> None:
        """
        Fetch all remotes in a single git invocation, pruning remote-tracking
        branches that no longer exist upstream.

        A failing fetch aborts with git's own error; there is no per-remote
        isolation and no retry.
        """
        logger.info(f"Updating all remotes in {self.cache.path}")
        self.engine.fetch_all(self.cache.path, prune=True)
