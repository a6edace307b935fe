"""
Module location resolution.

A module specifier is either a remote URL or a filesystem path.

Remote URLs are mirrored under the deps directory with a Go-style layout,
one directory per host name (port and user info dropped) followed by the URL
path:

    <deps>/
    ├── localhost/
    │   └── testdata/
    │       └── subdir/
    │           └── print_hello.ts
    └── example.com/
        └── path/
            └── to/
                └── file.ts

Filesystem paths are resolved against the directory of the containing file
and are read in place, never copied.

Usage:
    location, filename = resolve_module(
        "./subdir/print_hello.ts",
        "/repo/testdata/006_url_imports.ts",
        deps_dir,
    )
    # LocalPath(path=Path("/repo/testdata/subdir/print_hello.ts"))
"""

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union
from urllib.parse import SplitResult, unquote, urlsplit

from modcache.constants import REMOTE_SCHEMES, LocationKind
from modcache.errors import ResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalPath:
    """A module that lives on the local filesystem."""

    path: Path

    @property
    def kind(self) -> LocationKind:
        return LocationKind.Path

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class RemoteUrl:
    """A module addressed by a URL with an explicit scheme and host."""

    url: str

    @property
    def kind(self) -> LocationKind:
        return LocationKind.Url

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme.lower()

    @property
    def host(self) -> str:
        return _host_segment(urlsplit(self.url))

    @property
    def path(self) -> str:
        return urlsplit(self.url).path

    def __str__(self) -> str:
        return self.url


ModuleLocation = Union[LocalPath, RemoteUrl]


def _host_segment(parts: SplitResult) -> str:
    # host name only, no port or user info
    return parts.hostname or ""


def is_remote(location: ModuleLocation) -> bool:
    """
    Check whether a location must be obtained over the network.

    Only http and https URLs are remote; a URL with any other scheme is not
    fetchable and a local path never is.
    """
    if isinstance(location, RemoteUrl):
        return location.scheme in REMOTE_SCHEMES
    if isinstance(location, LocalPath):
        return False
    raise TypeError(f"Unknown module location: {location!r}")


def get_cache_filename(basedir: Path, url: str) -> Path:
    """
    Map a URL to its mirror path under basedir.

    Examples:
        http://localhost:4545/a/b.ts -> <basedir>/localhost/a/b.ts

    Raises:
        ValueError: If the URL has no host or its host or path climbs out of
            basedir
    """
    parts = urlsplit(url)
    host = _host_segment(parts)
    if not host:
        raise ValueError(f"URL has no host: {url}")
    if host in (".", ".."):
        raise ValueError(f"URL host escapes the mirror directory: {url}")

    rel_path = parts.path.lstrip("/")
    if rel_path:
        normalized = posixpath.normpath(rel_path)
        if normalized == ".." or normalized.startswith("../"):
            raise ValueError(f"URL path escapes the mirror directory: {url}")

    return Path(basedir) / host / rel_path


def resolve_local_path(module_specifier: str, containing_file: str) -> Path:
    """
    Resolve a filesystem specifier against the containing file.

    Absolute specifiers are returned unchanged. Relative specifiers are joined
    onto the containing file's directory: the containing file itself when it
    ends with a path separator, its parent otherwise.

    Raises:
        ResolutionError: If the specifier is relative and the containing file
            has no parent directory
    """
    module_path = Path(module_specifier)
    if module_path.is_absolute():
        return module_path

    separators = {"/", os.sep}
    if containing_file and containing_file[-1] in separators:
        base = Path(containing_file)
    elif any(sep in containing_file for sep in separators):
        base = Path(containing_file).parent
    else:
        raise ResolutionError(
            module_specifier,
            containing_file,
            "containing file has no parent directory",
        )

    return base / module_path


def resolve_module(
    module_specifier: str, containing_file: str, deps_dir: Path
) -> Tuple[ModuleLocation, Path]:
    """
    Resolve a module specifier to its location and local filename.

    Args:
        module_specifier: Path or URL as written by the importing file
        containing_file: Path of the importing file (or a directory ending
            with a separator)
        deps_dir: Root of the remote mirror

    Returns:
        Tuple of (location, local filename). For a LocalPath the filename is
        the location's own path.

    Raises:
        ResolutionError: If the specifier cannot be mapped to a location
    """
    logger.debug(
        f"resolve_module before module_specifier {module_specifier} "
        f"containing_file {containing_file}"
    )

    if not module_specifier:
        raise ResolutionError(module_specifier, containing_file, "empty specifier")

    try:
        parts = urlsplit(module_specifier)
    except ValueError as e:
        raise ResolutionError(module_specifier, containing_file, str(e)) from e

    location: ModuleLocation
    # A single-letter scheme is a Windows drive (C:\...), not a URL
    if len(parts.scheme) > 1:
        if parts.scheme.lower() == "file":
            path = resolve_local_path(unquote(parts.path), containing_file)
            location = LocalPath(path)
            filename = path
        else:
            try:
                filename = get_cache_filename(deps_dir, module_specifier)
            except ValueError as e:
                raise ResolutionError(module_specifier, containing_file, str(e)) from e
            location = RemoteUrl(module_specifier)
    else:
        path = resolve_local_path(module_specifier, containing_file)
        location = LocalPath(path)
        filename = path

    logger.debug(f"module_name: {location}, filename: {filename}")
    return location, filename


def src_file_to_url(filename: Union[str, Path], deps_dir: Path) -> str:
    """
    Map a file inside the mirror back to the URL it was fetched from.

    Files outside deps_dir are returned unchanged.

    Examples:
        <deps>/hello/world.txt -> http://hello/world.txt
        /hello -> /hello
    """
    try:
        rest = Path(filename).relative_to(deps_dir)
    except ValueError:
        return str(filename)
    return "http://" + rest.as_posix()
