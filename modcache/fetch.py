"""
Remote module retrieval.

Remote sources are mirrored under the deps directory. A mirror is reused
as-is unless the fetcher was created with reload=True; there is no freshness
check and no fallback to a stale mirror when a download fails.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import requests

from modcache.errors import CacheIOError, FetchError
from modcache.location import RemoteUrl
from modcache.utils import atomic_write_text, read_text

logger = logging.getLogger(__name__)

Transport = Callable[[str], str]


def fetch_sync_string(url: str, timeout: Optional[float] = None) -> str:
    """
    Download the full body of url as UTF-8 text.

    Args:
        url: http or https URL
        timeout: Seconds before giving up; None waits indefinitely

    Returns:
        The response body

    Raises:
        FetchError: On any transport failure, non-2xx status or undecodable body
    """
    try:
        req = requests.get(url, timeout=timeout)
        req.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(url, str(e)) from e

    try:
        return req.content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FetchError(url, f"response is not valid UTF-8: {e}") from e


class RemoteFetcher:
    """Obtain remote module sources through the local mirror."""

    def __init__(self, reload: bool = False, transport: Optional[Transport] = None):
        self.reload = reload
        self.transport = transport or fetch_sync_string

    def fetch(self, location: RemoteUrl, local_path: Path) -> str:
        """
        Return the source of a remote module.

        Downloads and (over)writes the mirror at local_path when reload is set
        or no mirror exists yet; otherwise reads the mirror without touching
        the network.

        Raises:
            FetchError: If the download fails; the mirror is left untouched
            CacheIOError: If the mirror cannot be read or written
        """
        local_path = Path(local_path)

        if self.reload or not local_path.exists():
            logger.info(f"Downloading {location}")
            source = self.transport(location.url)
            try:
                atomic_write_text(local_path, source)
            except OSError as e:
                raise CacheIOError(local_path, str(e)) from e
            return source

        logger.debug(f"Using mirror {local_path} for {location}")
        try:
            return read_text(local_path)
        except OSError as e:
            raise CacheIOError(local_path, str(e)) from e
