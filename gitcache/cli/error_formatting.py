"""Error formatting for CLI output."""

import re
import sys
from functools import wraps

import click
from git.exc import GitCommandError, GitCommandNotFound, GitError

from gitcache.cli.utils.logging import logger
from gitcache.exceptions import GitCacheError


def format_git_error(error: GitCommandError) -> str:
    """Reduce a failed git invocation to a one-line diagnostic.

    Example output:
        git fetch lib: fatal: repository 'https://host/lib.git/' not found
    """
    command = error.command
    if isinstance(command, (list, tuple)):
        command = " ".join(str(part) for part in command)

    match = re.search(r"stderr: '(.*)'", str(error.stderr), re.DOTALL)
    stderr = match.group(1) if match else str(error.stderr)
    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    if lines:
        return f"{command}: {lines[-1]}"
    return f"{command}: exit status {error.status}"


def format_error(error: Exception) -> str:
    if isinstance(error, GitCommandNotFound):
        return "git executable not found. Install git or set GIT_PYTHON_GIT_EXECUTABLE."
    if isinstance(error, GitCommandError):
        return format_git_error(error)
    return str(error)


def exit_on_error(func):
    """Report git-cache, git and filesystem errors on one line and exit with 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (GitCacheError, GitError, OSError) as e:
            logger.error(
                click.style("[ERROR]", fg="red", bold=True) + " " + format_error(e)
            )
            sys.exit(1)

    return wrapper
