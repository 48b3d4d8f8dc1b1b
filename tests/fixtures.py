"""Test doubles and repository helpers."""

import os
import shutil
from collections import OrderedDict
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import pytest
from git import Actor, Repo
from git.exc import GitCommandError

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)

AUTHOR = Actor("Cache Tester", "tester@example.org")


def make_source_repo(path, content="hello\n"):
    """Create a git repository at `path` with one commit."""
    repo = Repo.init(str(path))
    (path / "README").write_text(content)
    repo.index.add(["README"])
    repo.index.commit("initial", author=AUTHOR, committer=AUTHOR)
    return repo


class FakeEngine:
    """
    In-memory stand-in for GitEngine.

    Remotes are kept per store in registration order, and every call that
    would reach the network is recorded instead.
    """

    def __init__(self):
        self.remotes: Dict[Path, "OrderedDict[str, str]"] = {}
        self.initialized: List[Path] = []
        self.fetched: List[Tuple[Path, str]] = []
        self.fetched_all: List[Tuple[Path, bool]] = []
        self.clones: List[Tuple[Path, str, Tuple[str, ...], Optional[Path]]] = []
        self.commands: List[Tuple[Path, List[str]]] = []

    def init_bare(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
        (path / "config").write_text("[core]\n\tbare = true\n")
        (path / "HEAD").write_text("ref: refs/heads/main\n")
        (path / "objects").mkdir(exist_ok=True)
        self.initialized.append(path)

    def add_remote(self, store: Path, name: str, url: str) -> None:
        remotes = self.remotes.setdefault(store, OrderedDict())
        if name in remotes:
            raise GitCommandError(
                ["git", "remote", "add", name, url],
                3,
                f"error: remote {name} already exists.",
            )
        remotes[name] = url

    def remove_remote(self, store: Path, name: str) -> None:
        remotes = self.remotes.setdefault(store, OrderedDict())
        if name not in remotes:
            raise GitCommandError(
                ["git", "remote", "rm", name], 2, f"error: No such remote: '{name}'"
            )
        del remotes[name]

    def list_remotes(self, store: Path) -> List[Tuple[str, str, str]]:
        lines = []
        for name, url in self.remotes.get(store, {}).items():
            lines.append((name, url, "fetch"))
            lines.append((name, url, "push"))
        return lines

    def fetch(self, store: Path, name: str) -> None:
        self.fetched.append((store, name))

    def fetch_all(self, store: Path, prune: bool = True) -> None:
        self.fetched_all.append((store, prune))

    def clone_with_reference(
        self,
        store: Path,
        url: str,
        args: Sequence[str] = (),
        cwd: Optional[Path] = None,
    ) -> None:
        self.clones.append((store, url, tuple(args), cwd))
        if args and not args[0].startswith("-"):
            target = Path(cwd or os.getcwd()) / args[0]
            info = target / ".git" / "objects" / "info"
            info.mkdir(parents=True)
            (info / "alternates").write_text(f"{store / 'objects'}\n")

    def run(self, store: Path, args: Sequence[str]) -> Tuple[int, str, str]:
        self.commands.append((store, list(args)))
        return 0, f"ran {' '.join(args)}", ""
