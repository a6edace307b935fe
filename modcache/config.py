"""Configuration of the cache root and the HTTP transport"""

import configparser
import logging
import os
import platform
from pathlib import Path
from typing import Any, Callable, Optional, Union

from modcache.constants import APP_NAME, DEFAULT_ROOT_NAME, ROOT_ENV_VAR
from modcache.errors import CacheIOError

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

if platform.system() == "Darwin":
    # macOS
    config_dir = Path("~/Library/Application Support/modcache").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file():
    return config_dir / f"{APP_NAME}.cfg"


class ConfigAccessor:
    """
    Read-only view of the INI configuration file.

    Missing files, sections or keys fall back to a default instead of raising.

    Usage:
        config = ConfigAccessor()
        root = config.get("dirs", "root")
        timeout = config.get_float("fetch", "timeout")
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = get_config_file() if config_path is None else config_path
        self.config = configparser.ConfigParser(interpolation=None)
        if self.config_path.exists():
            self.config.read(self.config_path, encoding="utf-8")

    def get(self, section: str, key: str, default: Any = None) -> Any:
        return self.config.get(section, key, fallback=default)

    def get_float(self, section: str, key: str) -> Optional[float]:
        value = self.get(section, key)
        if value is None or not value.strip():
            return None
        try:
            return float(value)
        except ValueError:
            logger.warning(
                f"Ignoring invalid [{section}] {key} in {self.config_path}: {value!r}"
            )
            return None


config = ConfigAccessor()


def get_default_root(home_provider: Callable[[], Union[str, Path]] = Path.home) -> Path:
    """
    Get the default cache root, <home>/.modcache.

    Args:
        home_provider: Returns the user's home directory

    Raises:
        CacheIOError: If the home directory cannot be determined
    """
    try:
        home = home_provider()
    except (RuntimeError, KeyError, OSError) as e:
        raise CacheIOError(
            DEFAULT_ROOT_NAME, f"could not determine home directory: {e}"
        ) from e
    if not home:
        raise CacheIOError(DEFAULT_ROOT_NAME, "could not determine home directory")
    return Path(home) / DEFAULT_ROOT_NAME


def get_configured_root() -> Optional[Path]:
    """
    Get the cache root chosen by the environment or the config file.

    MODCACHE_DIR wins over the [dirs] root key. Returns None when neither is
    set, meaning the default root applies.
    """
    root = os.environ.get(ROOT_ENV_VAR) or config.get("dirs", "root")
    if not root:
        return None
    return Path(root).expanduser()


def get_fetch_timeout() -> Optional[float]:
    """
    Get the HTTP timeout in seconds from the [fetch] timeout key.

    Returns None (no timeout) when unset or not a number.
    """
    return config.get_float("fetch", "timeout")
