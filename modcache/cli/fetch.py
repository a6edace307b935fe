"""CLI commands for resolving and fetching modules"""

import sys
from pathlib import Path
from typing import Optional

import click

from modcache.cli.utils.args import (
    containing_file_option,
    debug_option,
    default_containing_file,
    open_cache_dir,
    read_input_file,
    reload_option,
    root_option,
)
from modcache.cli.utils.logging import logger
from modcache.errors import ModCacheError
from modcache.hashing import source_code_hash


@click.command("fetch")
@debug_option
@click.argument("specifier")
@containing_file_option
@root_option
@reload_option
@click.option("--source", is_flag=True, help="Print the module source code.")
def fetch(
    specifier: str,
    containing_file: Optional[str],
    root: Optional[Path],
    reload: bool,
    source: bool,
):
    """Resolve a module, load its source and check the compile cache.

    Example:

      mcache fetch http://localhost:4545/testdata/subdir/print_hello.ts
    """
    try:
        cache_dir = open_cache_dir(root, reload)
        out = cache_dir.resolve_and_fetch(
            specifier, containing_file or default_containing_file()
        )
    except ModCacheError as e:
        logger.error(f"Failed to fetch {specifier}: {e}")
        sys.exit(1)

    if source:
        click.echo(out.source_code, nl=False)
        return

    click.echo(f"module_name: {out.module_name}")
    click.echo(f"filename:    {out.filename}")
    cached = "yes" if out.maybe_output_code is not None else "no"
    click.echo(f"cached:      {cached}")


@click.command("resolve")
@debug_option
@click.argument("specifier")
@containing_file_option
@root_option
def resolve(specifier: str, containing_file: Optional[str], root: Optional[Path]):
    """Show where a module specifier resolves to, without loading it."""
    try:
        cache_dir = open_cache_dir(root)
        location, filename = cache_dir.resolve(
            specifier, containing_file or default_containing_file()
        )
    except ModCacheError as e:
        logger.error(f"Failed to resolve {specifier}: {e}")
        sys.exit(1)

    click.echo(f"kind:        {location.kind.name.lower()}")
    click.echo(f"module_name: {location}")
    click.echo(f"filename:    {filename}")


@click.command("hash")
@debug_option
@click.argument("filename")
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@root_option
def hash_(filename: str, source_file: str, root: Optional[Path]):
    """Print the compile cache key and slot for FILENAME with the source in SOURCE_FILE."""
    source_code = read_input_file(source_file)
    try:
        cache_dir = open_cache_dir(root)
    except ModCacheError as e:
        logger.error(f"Failed to open cache directory: {e}")
        sys.exit(1)

    click.echo(source_code_hash(filename, source_code))
    click.echo(cache_dir.compile_cache.cache_path(filename, source_code))


@click.command("info")
@debug_option
@root_option
def info(root: Optional[Path]):
    """Show the cache directories."""
    try:
        cache_dir = open_cache_dir(root)
    except ModCacheError as e:
        logger.error(f"Failed to open cache directory: {e}")
        sys.exit(1)

    click.echo(f"root: {cache_dir.root}")
    click.echo(f"gen:  {cache_dir.gen}")
    click.echo(f"deps: {cache_dir.deps}")
