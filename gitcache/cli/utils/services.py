"""Build the git-cache services a command needs.

Commands never reach for git configuration or git directly. The root context
object may carry replacements under the keys `config_store`, `engine` and
`policy`; anything missing falls back to the real implementation.
"""

import click

from gitcache.clone import CloneOrchestrator
from gitcache.lifecycle import CacheLifecycle
from gitcache.registry import RemoteRegistry
from gitcache.sync import SyncOrchestrator


def get_lifecycle(ctx: click.Context) -> CacheLifecycle:
    obj = ctx.find_root().obj or {}
    return CacheLifecycle(
        config_store=obj.get("config_store"),
        engine=obj.get("engine"),
        policy=obj.get("policy"),
    )


def get_registry(ctx: click.Context) -> RemoteRegistry:
    lifecycle = get_lifecycle(ctx)
    return RemoteRegistry(lifecycle.open(), lifecycle.engine)


def get_sync(ctx: click.Context) -> SyncOrchestrator:
    lifecycle = get_lifecycle(ctx)
    return SyncOrchestrator(lifecycle.open(), lifecycle.engine)


def get_cloner(ctx: click.Context) -> CloneOrchestrator:
    return CloneOrchestrator(get_registry(ctx))
