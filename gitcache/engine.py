"""
The git capability git-cache builds on.

Everything that touches git objects, packs or the network goes through a
RepositoryEngine. GitEngine implements it with GitPython; tests substitute a
fake. Git failures surface as GitPython's GitCommandError and are not
reinterpreted here.
"""

import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from git import Git, Repo

logger = logging.getLogger(__name__)

# (name, url, kind) where kind is "fetch" or "push"
RemoteLine = Tuple[str, str, str]


def parse_remote_listing(output: str) -> List[RemoteLine]:
    """
    Parse the output of `git remote -v`.

    Example:
        >>> parse_remote_listing("lib\\thttps://host/lib.git (fetch)")
        [('lib', 'https://host/lib.git', 'fetch')]
    """
    remotes = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        name, _, rest = line.partition("\t")
        if not rest:
            name, _, rest = line.partition(" ")
        url, _, kind = rest.strip().rpartition(" ")
        if not url:
            # no "(fetch)"/"(push)" suffix
            url, kind = kind, "(fetch)"
        remotes.append((name, url, kind.strip("()")))
    return remotes


class RepositoryEngine(Protocol):
    """Minimal interface git-cache needs from a version control engine."""

    def init_bare(self, path: Path) -> None: ...

    def add_remote(self, store: Path, name: str, url: str) -> None: ...

    def remove_remote(self, store: Path, name: str) -> None: ...

    def list_remotes(self, store: Path) -> List[RemoteLine]: ...

    def fetch(self, store: Path, name: str) -> None: ...

    def fetch_all(self, store: Path, prune: bool = True) -> None: ...

    def clone_with_reference(
        self,
        store: Path,
        url: str,
        args: Sequence[str] = (),
        cwd: Optional[Path] = None,
    ) -> None: ...

    def run(self, store: Path, args: Sequence[str]) -> Tuple[int, str, str]: ...


class GitEngine:
    """RepositoryEngine backed by the git command line through GitPython."""

    def _git(self, working_dir: Optional[Path]) -> Git:
        return Git(str(working_dir) if working_dir else None)

    def init_bare(self, path: Path) -> None:
        logger.debug(f"git init --bare {path}")
        Repo.init(str(path), bare=True)

    def add_remote(self, store: Path, name: str, url: str) -> None:
        logger.debug(f"git remote add {name} {url}")
        self._git(store).remote("add", name, url)

    def remove_remote(self, store: Path, name: str) -> None:
        logger.debug(f"git remote rm {name}")
        self._git(store).remote("rm", name)

    def list_remotes(self, store: Path) -> List[RemoteLine]:
        return parse_remote_listing(self._git(store).remote("-v"))

    def fetch(self, store: Path, name: str) -> None:
        logger.debug(f"git fetch {name}")
        self._git(store).fetch(name)

    def fetch_all(self, store: Path, prune: bool = True) -> None:
        args = ["--all"]
        if prune:
            args.append("--prune")
        logger.debug(f"git fetch {' '.join(args)}")
        self._git(store).fetch(*args)

    def clone_with_reference(
        self,
        store: Path,
        url: str,
        args: Sequence[str] = (),
        cwd: Optional[Path] = None,
    ) -> None:
        logger.debug(f"git clone --reference {store} {url} {' '.join(args)}")
        self._git(cwd).clone("--reference", str(store), url, *args)

    def run(self, store: Path, args: Sequence[str]) -> Tuple[int, str, str]:
        """Run an arbitrary git command in the store, without raising on failure."""
        logger.debug(f"git {' '.join(args)} (in {store})")
        status, stdout, stderr = self._git(store).execute(
            ["git", *args],
            with_extended_output=True,
            with_exceptions=False,
        )
        return status, stdout, stderr
