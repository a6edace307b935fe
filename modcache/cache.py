"""
Content-addressed cache of compiled module output.

Each (filename, source) pair owns one slot, <gen>/<sha1>.js. A slot is
written once and never overwritten: identical inputs are expected to compile
to identical output, so the first writer wins.

Concurrency:
    The existence check and the write run under a per-slot FileLock, and the
    content is renamed into place from a temp file, so a second process never
    replaces an existing slot and readers never see a partial file.
"""

import logging
from pathlib import Path
from typing import Optional

from filelock import FileLock

from modcache.constants import CACHE_SUFFIX
from modcache.errors import CacheIOError
from modcache.hashing import source_code_hash
from modcache.utils import atomic_write_text, read_text

logger = logging.getLogger(__name__)


class CompileCache:
    def __init__(self, gen_dir: Path):
        self.gen_dir = Path(gen_dir)

    def cache_path(self, filename: str, source_code: str) -> Path:
        cache_key = source_code_hash(filename, source_code)
        return self.gen_dir / f"{cache_key}{CACHE_SUFFIX}"

    def lookup(self, filename: str, source_code: str) -> Optional[str]:
        """
        Return the cached output for a module, or None on a cache miss.

        Raises:
            CacheIOError: If the slot exists but cannot be read
        """
        path = self.cache_path(filename, source_code)
        logger.debug(f"load_cache {path}")
        try:
            return read_text(path)
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheIOError(path, str(e)) from e

    def store(self, filename: str, source_code: str, output_code: str) -> None:
        """
        Store compiled output unless the slot is already populated.

        Raises:
            CacheIOError: If the slot cannot be written
        """
        path = self.cache_path(filename, source_code)
        lock = path.with_suffix(path.suffix + ".lock")
        try:
            with FileLock(lock):
                if path.exists():
                    logger.debug(f"code_cache hit, keeping {path}")
                    return
                atomic_write_text(path, output_code)
                logger.debug(f"code_cache wrote {path}")
        except OSError as e:
            raise CacheIOError(path, str(e)) from e
