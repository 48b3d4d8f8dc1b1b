"""git-cache CLI"""

import click

from gitcache import __version__
from gitcache.cli.cache import (
    cache_dir,
    clone,
    delete,
    init,
    passthrough,
    show,
    update,
)
from gitcache.cli.remote import remote
from gitcache.cli.utils.logging import configure_logging


class PassthroughGroup(click.Group):
    """Command group that hands unknown commands to git, run in the cache."""

    def resolve_command(self, ctx, args):
        if args and not args[0].startswith("-"):
            if self.get_command(ctx, args[0]) is None:
                return passthrough.name, passthrough, args
        return super().resolve_command(ctx, args)


def format_recursive_help(ctx, param, value):
    """Custom help formatter that shows all subcommands and their sub-subcommands"""
    if not value or ctx.resilient_parsing:
        return

    click.echo("Usage: git-cache [OPTIONS] COMMAND [ARGS]...")
    click.echo("")
    click.echo("  Shared object cache for git clones.")
    click.echo("")
    main_cli = ctx.find_root().command

    click.echo("Options:")
    for option in main_cli.get_params(ctx):
        record = option.get_help_record(ctx)
        if record:
            click.echo(f"  {record[0]:<21} {record[1]}")
    click.echo("")
    click.echo("Commands:")

    for name, command in main_cli.commands.items():
        if command.hidden:
            continue
        click.echo(f"  {name:<12} {command.get_short_help_str(50)}")

        if hasattr(command, "commands"):
            for subname, subcommand in command.commands.items():
                click.echo(
                    f"    {name} {subname:<10} {subcommand.get_short_help_str(45)}"
                )

    click.echo("")
    click.echo("Any other command is run by git inside the cache directory.")
    ctx.exit()


@click.group(cls=PassthroughGroup)
@click.version_option(__version__, prog_name="git-cache")
@click.option(
    "--help",
    "-h",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=format_recursive_help,
    help="Show this message and exit.",
)
@click.option(
    "--debug/--no-debug",
    default=False,
    envvar="GIT_CACHE_DEBUG",
    help="Enable debug mode",
)
@click.pass_context
def cli(ctx, debug: bool):
    """
    Shared object cache for git clones.
    """
    ctx.ensure_object(dict)
    ctx.obj["DEBUG"] = debug
    configure_logging(debug)


cli.add_command(init)
cli.add_command(delete)
cli.add_command(cache_dir)
cli.add_command(remote)
cli.add_command(show)
cli.add_command(update)
cli.add_command(update, name="fetch")
cli.add_command(clone)

if __name__ == "__main__":
    cli(obj={})
