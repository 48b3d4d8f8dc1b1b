"""Application settings and the well-known locations of git caches"""

import configparser
import os
import platform
from pathlib import Path
from typing import Any, List, Optional, Tuple

APP_NAME = "git-cache"

CACHE_DIRECTORY_KEY = "cache.directory"

DEFAULT_SHARED_GROUP = "git-cache"

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/git-cache").expanduser()
    SYSTEM_CACHE_ROOTS: Tuple[str, ...] = (
        "/Library/Caches/git-cache",
        "/usr/local/var/cache/git-cache",
    )
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))
    SYSTEM_CACHE_ROOTS = (
        "/var/cache/git-cache",
        "/var/cache/git",
        "/cache/git",
    )


def get_config_file() -> Path:
    override = os.environ.get("GIT_CACHE_CONFIG")
    if override:
        return Path(override).expanduser()
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    Read-only view of the git-cache settings file.

    A missing file, section or key reads as the caller's default; the file is
    never created or written by git-cache.

    Usage:
        settings = ConfigAccessor()
        group = settings.get("shared", "group", DEFAULT_SHARED_GROUP)
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or get_config_file()
        self.config = configparser.ConfigParser()
        # read() skips files that do not exist
        self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        return self.config.get(section, key, fallback=default)


def get_shared_group(settings: Optional[ConfigAccessor] = None) -> str:
    """Name of the unix group that owns shared caches."""
    settings = settings or ConfigAccessor()
    return settings.get("shared", "group", DEFAULT_SHARED_GROUP)


def get_system_cache_roots(settings: Optional[ConfigAccessor] = None) -> List[str]:
    """
    Well-known system-wide cache roots, in priority order.

    The built-in table can be replaced with a whitespace-separated list under
    `[shared] roots` in the settings file.
    """
    settings = settings or ConfigAccessor()
    roots = settings.get("shared", "roots")
    if roots:
        return roots.split()
    return list(SYSTEM_CACHE_ROOTS)


def get_user_cache_dir() -> Path:
    """
    Default cache location for the invoking user.

    Honors XDG_CACHE_HOME, falling back to ~/.cache/git-cache.
    """
    xdg_cache_home = os.environ.get("XDG_CACHE_HOME") or os.path.join(
        os.path.expanduser("~"), ".cache"
    )
    return Path(xdg_cache_home) / APP_NAME
