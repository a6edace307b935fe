"""
Directory-scoped module loader and compile cache.

Layout:
    <root>/
    ├── gen/                      # compiled output, one slot per (filename, source)
    │   └── a3e29aece8d35a19bf9da2bb1c086af71fb36ed5.js
    └── deps/                     # mirrored remote sources
        └── localhost/
            └── testdata/subdir/print_hello.ts

Usage:
    cache_dir = ModuleCacheDir.initialize(reload=False)
    out = cache_dir.resolve_and_fetch("./util.ts", "/repo/main.ts")
    if out.maybe_output_code is None:
        output = compile(out.source_code)  # done by the runtime
        cache_dir.store_compiled_output(out.filename, out.source_code, output)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from modcache.cache import CompileCache
from modcache.config import get_default_root
from modcache.constants import ASSET_PREFIX, DEPS_DIR_NAME, GEN_DIR_NAME
from modcache.errors import (
    CacheIOError,
    NotFoundError,
    ReservedLocationError,
    ResolutionError,
)
from modcache.fetch import RemoteFetcher, Transport
from modcache.location import (
    LocalPath,
    ModuleLocation,
    RemoteUrl,
    is_remote,
    resolve_module,
    src_file_to_url,
)
from modcache.utils import is_temp_file, read_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryLayout:
    root: Path
    gen: Path
    deps: Path

    @classmethod
    def from_root(cls, root: Union[str, Path]) -> "DirectoryLayout":
        root = Path(root)
        return cls(root=root, gen=root / GEN_DIR_NAME, deps=root / DEPS_DIR_NAME)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of resolving and loading one module."""

    module_name: str
    filename: str
    source_code: str
    maybe_output_code: Optional[str] = None


class ModuleCacheDir:
    """
    Owns the gen/deps layout and composes resolution, fetching and the
    compile cache.

    Both gen and deps are created on construction and exist for the lifetime
    of the object.
    """

    def __init__(
        self,
        root: Union[str, Path],
        reload: bool = False,
        transport: Optional[Transport] = None,
    ):
        self.layout = DirectoryLayout.from_root(root)
        self.reload = reload

        for directory in (self.layout.gen, self.layout.deps):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CacheIOError(directory, f"could not create directory: {e}") from e

        logger.debug(f"root {self.root}")
        logger.debug(f"gen {self.gen}")
        logger.debug(f"deps {self.deps}")

        self.compile_cache = CompileCache(self.gen)
        self.fetcher = RemoteFetcher(reload=reload, transport=transport)

    @classmethod
    def initialize(
        cls,
        reload: bool = False,
        custom_root: Optional[Union[str, Path]] = None,
        home_provider: Callable[[], Union[str, Path]] = Path.home,
        transport: Optional[Transport] = None,
    ) -> "ModuleCacheDir":
        """
        Create the cache directory structure.

        Args:
            reload: Always re-download remote modules, ignoring mirrors
            custom_root: Cache root; defaults to <home>/.modcache
            home_provider: Used to find the home directory when no custom
                root is given
            transport: Downloads a URL as text; defaults to requests

        Raises:
            CacheIOError: If the home directory is unknown or a directory
                cannot be created
        """
        if custom_root is None:
            root = get_default_root(home_provider)
        else:
            root = Path(custom_root)
        return cls(root, reload=reload, transport=transport)

    @property
    def root(self) -> Path:
        return self.layout.root

    @property
    def gen(self) -> Path:
        return self.layout.gen

    @property
    def deps(self) -> Path:
        return self.layout.deps

    def resolve(
        self, module_specifier: str, containing_file: str
    ) -> Tuple[ModuleLocation, Path]:
        """Resolve a specifier to (location, local filename) without loading it."""
        return resolve_module(module_specifier, containing_file, self.deps)

    def _get_source_code(self, location: ModuleLocation, filename: Path) -> str:
        if isinstance(location, RemoteUrl):
            return self.fetcher.fetch(location, filename)

        if isinstance(location, LocalPath):
            if str(location).startswith(ASSET_PREFIX):
                raise ReservedLocationError(str(location))
            assert str(location) == str(
                filename
            ), "if a module isn't remote, it should have the same filename"
            try:
                return read_text(filename)
            except FileNotFoundError as e:
                raise NotFoundError(filename) from e
            except OSError as e:
                raise CacheIOError(filename, str(e)) from e

        raise TypeError(f"Unknown module location: {location!r}")

    def resolve_and_fetch(
        self, module_specifier: str, containing_file: str
    ) -> FetchResult:
        """
        Resolve a module, load its source and look up its compiled output.

        A compile cache miss is not an error: maybe_output_code is None.

        Raises:
            ResolutionError: The specifier cannot be mapped to a location
            ReservedLocationError: The specifier is in the asset namespace
            NotFoundError: A local module file does not exist
            FetchError: A remote module could not be downloaded
            CacheIOError: A cache or mirror file could not be read or written
        """
        location, filepath = self.resolve(module_specifier, containing_file)
        if isinstance(location, RemoteUrl) and not is_remote(location):
            raise ResolutionError(
                module_specifier,
                containing_file,
                f"unsupported URL scheme '{location.scheme}'",
            )
        filename = str(filepath)

        logger.debug(
            f"code_fetch. module_name = {location} module_specifier = {module_specifier} "
            f"containing_file = {containing_file} filename = {filename}"
        )

        source_code = self._get_source_code(location, filepath)
        output_code = self.compile_cache.lookup(filename, source_code)

        return FetchResult(
            module_name=str(location),
            filename=filename,
            source_code=source_code,
            maybe_output_code=output_code,
        )

    def store_compiled_output(
        self, filename: str, source_code: str, output_code: str
    ) -> None:
        """Store compiled output for (filename, source_code) unless already cached."""
        self.compile_cache.store(filename, source_code, output_code)

    def list_mirrored(self) -> List[Dict[str, object]]:
        """
        Describe the mirrored remote modules.

        Returns:
            List of dictionaries sorted by path:
            - path: Path relative to deps (e.g., "localhost/a/b.ts")
            - url: URL the file maps back to
            - size: File size in bytes
        """
        results = []
        for file_path in sorted(self.deps.rglob("*")):
            if not file_path.is_file() or is_temp_file(file_path):
                continue
            results.append(
                {
                    "path": file_path.relative_to(self.deps).as_posix(),
                    "url": src_file_to_url(file_path, self.deps),
                    "size": file_path.stat().st_size,
                }
            )
        return results
