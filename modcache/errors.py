"""
Exception classes for module resolution and the compile cache.
"""

from pathlib import Path
from typing import Union


class ModCacheError(Exception):
    """Base exception for all resolver and cache errors."""

    pass


class ResolutionError(ModCacheError):
    """Raised when a module specifier cannot be mapped to a location."""

    def __init__(self, specifier: str, containing_file: str, reason: str = ""):
        self.specifier = specifier
        self.containing_file = containing_file
        self.reason = reason
        message = f"Cannot resolve module '{specifier}' from '{containing_file}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class NotFoundError(ModCacheError):
    """Raised when a local module file does not exist at its resolved path."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Module not found: {self.path}")


class FetchError(ModCacheError):
    """Raised when a remote module cannot be retrieved."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        if reason:
            super().__init__(f"Failed to fetch {url}: {reason}")
        else:
            super().__init__(f"Failed to fetch {url}")


class CacheIOError(ModCacheError):
    """Raised on a filesystem failure in the cache directories.

    A missing compile cache slot is not an error and never raises this.
    """

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        self.reason = reason
        if reason:
            super().__init__(f"Cache I/O error for {self.path}: {reason}")
        else:
            super().__init__(f"Cache I/O error for {self.path}")


class ReservedLocationError(ModCacheError):
    """Raised for specifiers in the reserved asset namespace."""

    def __init__(self, module_name: str):
        self.module_name = module_name
        super().__init__(
            f"Module '{module_name}' is in the reserved asset namespace "
            "and must be resolved by the runtime"
        )
