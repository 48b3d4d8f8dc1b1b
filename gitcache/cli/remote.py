"""CLI commands for the remotes tracked in the cache"""

import click

from gitcache.cli.error_formatting import exit_on_error
from gitcache.cli.utils.services import get_registry


@click.group(name="remote")
@click.pass_context
def remote(ctx):
    """Manage the remotes fetched into the cache."""
    ctx.ensure_object(dict)


@remote.command("add")
@click.argument("name")
@click.argument("url")
@click.pass_context
@exit_on_error
def add_remote(ctx, name: str, url: str):
    """Add remote NAME at URL and fetch it."""
    get_registry(ctx).add(name, url)


@remote.command("rm")
@click.option("--force", is_flag=True, help="Confirm removal of the remote.")
@click.argument("name")
@click.pass_context
@exit_on_error
def remove_remote(ctx, force: bool, name: str):
    """Remove remote NAME from the cache."""
    get_registry(ctx).remove(name, force=force)


@remote.command("show")
@click.pass_context
@exit_on_error
def show_remotes(ctx):
    """List remotes and their fetch URLs."""
    for entry in get_registry(ctx).list():
        click.echo(str(entry))
