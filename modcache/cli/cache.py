"""CLI commands for compile cache and mirror management"""

import sys
from pathlib import Path
from typing import Optional

import click

from modcache.cli.utils.args import (
    debug_option,
    open_cache_dir,
    read_input_file,
    root_option,
)
from modcache.cli.utils.logging import logger
from modcache.errors import ModCacheError


@click.group(name="cache")
def cache():
    """Manage the compile cache and the remote mirror."""
    pass


@cache.command("store")
@debug_option
@click.argument("filename")
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_file", type=click.Path(exists=True, dir_okay=False))
@root_option
def store(filename: str, source_file: str, output_file: str, root: Optional[Path]):
    """Store compiled output for FILENAME.

    SOURCE_FILE holds the module source the output was compiled from and
    OUTPUT_FILE the compiled code. An existing entry is never overwritten.

    Example:

      mcache cache store /repo/hello.ts hello.ts hello.js
    """
    source_code = read_input_file(source_file)
    output_code = read_input_file(output_file)

    try:
        cache_dir = open_cache_dir(root)
        cache_dir.store_compiled_output(filename, source_code, output_code)
    except ModCacheError as e:
        logger.error(f"Failed to store compiled output for {filename}: {e}")
        sys.exit(1)

    logger.info(
        f"Stored {cache_dir.compile_cache.cache_path(filename, source_code)}"
    )


@cache.command("list")
@debug_option
@root_option
def list_(root: Optional[Path]):
    """List mirrored remote modules."""
    try:
        cache_dir = open_cache_dir(root)
    except ModCacheError as e:
        logger.error(f"Failed to open cache directory: {e}")
        sys.exit(1)

    entries = cache_dir.list_mirrored()
    if not entries:
        logger.info("No mirrored modules")
        return

    for entry in entries:
        click.echo(f"{entry['url']}\t{entry['size']}\t{entry['path']}")
