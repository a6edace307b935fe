"""Module-location resolver and content-addressed compilation cache."""

__version__ = "0.1.0"

from modcache.dir import DirectoryLayout, FetchResult, ModuleCacheDir  # noqa: E402
from modcache.errors import (  # noqa: E402
    CacheIOError,
    FetchError,
    ModCacheError,
    NotFoundError,
    ReservedLocationError,
    ResolutionError,
)

__all__ = [
    "__version__",
    "DirectoryLayout",
    "FetchResult",
    "ModuleCacheDir",
    "CacheIOError",
    "FetchError",
    "ModCacheError",
    "NotFoundError",
    "ReservedLocationError",
    "ResolutionError",
]
