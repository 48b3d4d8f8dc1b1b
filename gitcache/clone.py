"""Clones that borrow objects from the cache store"""

import logging
import shlex
from pathlib import Path
from typing import Optional

from gitcache.exceptions import RemoteNotFoundError
from gitcache.registry import RemoteRegistry

logger = logging.getLogger(__name__)


class CloneOrchestrator:
    def __init__(self, registry: RemoteRegistry):
        self.registry = registry
        self.engine = registry.engine

    @property
    def store(self) -> Path:
        return self.registry.store

    def _url(self, name: str) -> str:
        url = self.registry.find_url(name)
        if url is None:
            raise RemoteNotFoundError(name)
        return url

    def clone(self, name: str, *args: str, cwd: Optional[Path] = None) -> None:
        """
        Clone the remote registered as `name`, referencing the store.

        Extra arguments (target directory, --branch, ...) are handed to
        `git clone` unchanged.
        """
        url = self._url(name)
        logger.info(f"Cloning {url} with objects from {self.store}")
        self.engine.clone_with_reference(self.store, url, args, cwd=cwd)

    def clone_command(self, name: str) -> str:
        """The git command line clone() would run for `name`."""
        url = self._url(name)
        return shlex.join(["git", "clone", "--reference", str(self.store), url])
