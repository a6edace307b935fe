"""modcache CLI"""

import click

from modcache import __version__
from modcache.cli.cache import cache
from modcache.cli.fetch import fetch, hash_, info, resolve
from modcache.cli.utils.args import debug_option


@click.group()
@click.version_option(__version__, prog_name="modcache")
@debug_option
@click.pass_context
def cli(ctx):
    """
    Module resolver and compile cache command line interface.
    """
    ctx.ensure_object(dict)


cli.add_command(fetch)
cli.add_command(resolve)
cli.add_command(hash_)
cli.add_command(info)
cli.add_command(cache)

if __name__ == "__main__":
    cli(obj={})
