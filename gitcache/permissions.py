"""Group-writable permissions for caches shared between users"""

import grp
import logging
import os
import shutil
import stat
from pathlib import Path
from typing import Optional, Sequence, Union

from gitcache.config import get_shared_group, get_system_cache_roots
from gitcache.exceptions import SharedGroupNotFoundError

logger = logging.getLogger(__name__)

SHARED_UMASK = 0o002


def is_under(path: Union[str, Path], root: Union[str, Path]) -> bool:
    """True if `path` equals `root` or lies below it. Purely lexical."""
    path_parts = Path(os.path.normpath(os.path.expanduser(str(path)))).parts
    root_parts = Path(os.path.normpath(str(root))).parts
    return path_parts[: len(root_parts)] == root_parts


class PermissionPolicy:
    """
    Classifies cache locations as shared or private, and makes shared ones
    writable by every member of the shared group.

    A cache is shared if and only if it lives under one of the well-known
    system cache roots.
    """

    def __init__(
        self,
        system_roots: Optional[Sequence[str]] = None,
        group: Optional[str] = None,
    ):
        self.system_roots = list(
            system_roots if system_roots is not None else get_system_cache_roots()
        )
        self.group = group or get_shared_group()

    def is_shared(self, path: Union[str, Path]) -> bool:
        return any(is_under(path, root) for root in self.system_roots)

    def check_group(self, path: Union[str, Path]) -> None:
        """Fail early if a shared cache at `path` could not be handed to its group."""
        if not self.is_shared(path):
            return
        try:
            grp.getgrnam(self.group)
        except KeyError:
            raise SharedGroupNotFoundError(self.group, str(path))

    def apply_umask(self, path: Union[str, Path]) -> None:
        """Keep group read/write on files created by this process."""
        if self.is_shared(path):
            old = os.umask(SHARED_UMASK)
            logger.debug(f"Shared cache {path}: umask {old:03o} -> {SHARED_UMASK:03o}")

    def fix_ownership(self, path: Union[str, Path]) -> None:
        """
        Hand a freshly created shared cache over to the shared group.

        Recursively sets the group and adds group read/write. Directories also
        get the setgid bit so objects written later inherit the group.
        """
        if not self.is_shared(path):
            return

        logger.info(f"Granting group '{self.group}' write access to {path}")
        for root, _dirs, files in os.walk(path):
            self._share(Path(root), directory=True)
            for name in files:
                self._share(Path(root) / name, directory=False)

    def _share(self, path: Path, directory: bool) -> None:
        if path.is_symlink():
            return
        shutil.chown(path, group=self.group)
        mode = path.stat().st_mode | stat.S_IRGRP | stat.S_IWGRP
        if directory:
            mode |= stat.S_IXGRP | stat.S_ISGID
        path.chmod(mode)
