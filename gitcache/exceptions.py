"""
Exception classes for git-cache.
"""

from typing import Optional


class GitCacheError(Exception):
    """Base exception for all git-cache errors."""

    pass


class CacheNotFoundError(GitCacheError):
    """Raised when no valid cache directory can be resolved."""

    def __init__(self, path: Optional[str] = None, reason: str = ""):
        self.path = path
        if path:
            message = f"No git cache found at {path}"
        else:
            message = "No git cache directory configured"
        if reason:
            message += f" ({reason})"
        super().__init__(f"{message}. Run 'git-cache init' to create one.")


class AlreadyInitializedError(GitCacheError):
    """Raised when initializing a directory that already holds a cache."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Git cache already initialized in {path}")


class UnrecognizedScopeError(GitCacheError):
    """Raised for a cache type other than 'local' or 'global'."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            f"Unrecognized cache type '{token}'. Expected 'local' or 'global'."
        )


class MissingArgumentError(GitCacheError):
    """Raised when a required name, url or path is empty."""

    def __init__(self, argument: str, hint: str = ""):
        self.argument = argument
        message = f"Missing required argument: {argument}"
        if hint:
            message += f". {hint}"
        super().__init__(message)


class ConfirmationRequiredError(GitCacheError):
    """Raised when a destructive operation is invoked without --force."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Refusing to {operation} without --force")


class RemoteNotFoundError(GitCacheError):
    """Raised when a named remote is not registered in the cache."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Remote '{name}' is not registered in the cache. "
            "Use 'git-cache remote add' first."
        )


class SharedGroupNotFoundError(GitCacheError):
    """Raised when the group that should own a shared cache does not exist."""

    def __init__(self, group: str, path: str):
        self.group = group
        self.path = path
        super().__init__(
            f"Group '{group}' for shared cache {path} does not exist. "
            "Create it, or set another group under [shared] group in the "
            "git-cache settings file."
        )
