"""CLI commands for the cache store"""

from typing import Optional, Tuple

import click

from gitcache.cli.error_formatting import exit_on_error
from gitcache.cli.utils.logging import logger
from gitcache.cli.utils.services import (
    get_cloner,
    get_lifecycle,
    get_registry,
    get_sync,
)


@click.command("init")
@click.argument("directory", required=False)
@click.argument("cache_type", metavar="[TYPE]", required=False)
@click.pass_context
@exit_on_error
def init(ctx, directory: Optional[str], cache_type: Optional[str]):
    """Create the cache in DIR.

    TYPE is 'local' (the default), a cache for the current user recorded in
    the global git config, or 'global', a cache shared by all users of the
    host recorded in the system git config.

    Example:

      git-cache init ~/.cache/git-cache local
    """
    cache = get_lifecycle(ctx).create(directory, cache_type)
    click.echo(str(cache.path))


@click.command("delete")
@click.option("--force", is_flag=True, help="Confirm deletion of the cache.")
@click.pass_context
@exit_on_error
def delete(ctx, force: bool):
    """Delete the system and user caches, and their configuration."""
    for cache in get_lifecycle(ctx).delete(force=force):
        click.echo(f"Deleted {cache.scope} cache {cache.path}")


@click.command("dir")
@click.pass_context
@exit_on_error
def cache_dir(ctx):
    """Print the cache directory."""
    click.echo(str(get_lifecycle(ctx).locate()))


@click.command("show")
@click.argument("name", required=False)
@click.pass_context
@exit_on_error
def show(ctx, name: Optional[str]):
    """List cached remotes, or print the clone command for NAME."""
    if not name:
        for entry in get_registry(ctx).list():
            click.echo(str(entry))
        return

    click.echo(get_cloner(ctx).clone_command(name))


@click.command("update")
@click.pass_context
@exit_on_error
def update(ctx):
    """Fetch all remotes into the cache, pruning stale branches."""
    get_sync(ctx).update_all()
    logger.info("Cache up to date")


@click.command(
    "clone",
    context_settings={"ignore_unknown_options": True},
)
@click.argument("name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
@exit_on_error
def clone(ctx, name: str, args: Tuple[str, ...]):
    """Clone remote NAME using the cache as reference.

    ARGS are passed on to git clone, for instance a target directory or
    --branch.

    Example:

      git-cache clone lib ~/src/lib --branch main
    """
    get_cloner(ctx).clone(name, *args)


@click.command(
    "git",
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
    hidden=True,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
@exit_on_error
def passthrough(ctx, args: Tuple[str, ...]):
    """Run any other git command inside the cache."""
    lifecycle = get_lifecycle(ctx)
    cache = lifecycle.open()
    status, stdout, stderr = lifecycle.engine.run(cache.path, list(args))
    if stdout:
        click.echo(stdout)
    if stderr:
        click.echo(stderr, err=True)
    ctx.exit(status)
