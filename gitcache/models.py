"""Data model for the cache store and the remotes it tracks"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

# A bare repository always has a top-level config file
STORE_MARKER = "config"


class CacheState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    DELETED = "deleted"


@dataclass
class CacheDirectory:
    """The single shared store, and the configuration scope recording it."""

    path: Path
    scope: str
    state: CacheState = CacheState.UNINITIALIZED

    @property
    def marker(self) -> Path:
        return self.path / STORE_MARKER

    def is_valid(self) -> bool:
        return self.path.is_dir() and self.marker.is_file()


@dataclass(frozen=True)
class RemoteEntry:
    """One upstream source fetched into the store."""

    name: str
    url: str

    def __str__(self) -> str:
        return f"{self.name}\t{self.url}"
