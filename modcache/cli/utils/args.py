"""Options shared by commands that open a cache directory."""

import os
import sys
from functools import partial
from pathlib import Path
from typing import Optional

import click

from modcache.config import get_configured_root, get_fetch_timeout
from modcache.dir import ModuleCacheDir
from modcache.fetch import fetch_sync_string
from modcache.utils import read_text

from .logging import configure_logging, logger


def _set_debug(ctx, param, value: bool):
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)

    if "DEBUG" not in root_ctx.obj:
        root_ctx.obj["DEBUG"] = False

    # Any level may turn debug on; only the top level may turn it off
    if value is True or ctx is root_ctx:
        root_ctx.obj["DEBUG"] = value

    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]


debug_option = click.option(
    "--debug/--no-debug",
    is_eager=True,
    expose_value=False,
    callback=_set_debug,
    help="Enable debug mode",
)

root_option = click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Cache root directory. Defaults to $MODCACHE_DIR, the config file, then ~/.modcache.",
)

reload_option = click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Download remote modules again even if they are mirrored.",
)

containing_file_option = click.option(
    "--containing-file",
    "-c",
    type=str,
    default=None,
    help="File that imports the module. Defaults to the current directory.",
)


def default_containing_file() -> str:
    """The current directory with a trailing separator, so it is used as the base."""
    return os.path.join(str(Path.cwd()), "")


def open_cache_dir(root: Optional[Path], reload: bool = False) -> ModuleCacheDir:
    """Open the cache directory honouring the config file root and fetch timeout."""
    transport = partial(fetch_sync_string, timeout=get_fetch_timeout())
    return ModuleCacheDir.initialize(
        reload=reload,
        custom_root=root or get_configured_root(),
        transport=transport,
    )


def read_input_file(path: str) -> str:
    """Read a UTF-8 input file for a command, exiting with 1 if it cannot be decoded."""
    try:
        return read_text(Path(path))
    except (UnicodeDecodeError, OSError) as e:
        logger.error(f"Failed to read {path}: {e}")
        sys.exit(1)
