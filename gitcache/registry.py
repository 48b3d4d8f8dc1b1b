"""Named upstream sources tracked as remotes of the cache store"""

import logging
from typing import List, Optional

from gitcache.engine import GitEngine, RepositoryEngine
from gitcache.exceptions import ConfirmationRequiredError, MissingArgumentError
from gitcache.models import CacheDirectory, RemoteEntry

logger = logging.getLogger(__name__)


class RemoteRegistry:
    """
    Add, remove and look up the remotes of the store.

    The store's own remote configuration is the only record of what is
    cached; nothing is kept on the side.
    """

    def __init__(self, cache: CacheDirectory, engine: Optional[RepositoryEngine] = None):
        self.cache = cache
        self.engine = engine or GitEngine()

    @property
    def store(self):
        return self.cache.path

    def add(self, name: str, url: str) -> None:
        """Register `url` under `name` and fetch its history right away."""
        if not name:
            raise MissingArgumentError("NAME")
        if not url:
            raise MissingArgumentError("URL")

        self.engine.add_remote(self.store, name, url)
        logger.info(f"Fetching {name} ({url}) into the cache")
        self.engine.fetch(self.store, name)

    def remove(self, name: str, force: bool = False) -> None:
        if not name:
            raise MissingArgumentError("NAME")
        if not force:
            raise ConfirmationRequiredError(f"remove remote '{name}'")

        self.engine.remove_remote(self.store, name)
        logger.info(f"Removed remote {name} from the cache")

    def list(self) -> List[RemoteEntry]:
        """Registered remotes with their fetch URLs, in git's listing order."""
        return [
            RemoteEntry(name, url)
            for name, url, kind in self.engine.list_remotes(self.store)
            if kind == "fetch"
        ]

    def find_url(self, name: str) -> Optional[str]:
        """Fetch URL of `name`, or None when no such remote is registered."""
        if not name:
            raise MissingArgumentError("NAME")
        for entry in self.list():
            if entry.name == name:
                return entry.url
        return None
