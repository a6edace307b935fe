from enum import Enum


class LocationKind(Enum):
    Path = 1
    Url = 2


APP_NAME = "modcache"

# Default root is <home>/.modcache
DEFAULT_ROOT_NAME = f".{APP_NAME}"
GEN_DIR_NAME = "gen"
DEPS_DIR_NAME = "deps"

# Compiled output slots are <gen>/<key>.js
CACHE_SUFFIX = ".js"

# atomic writes go through .<name>.<random>.tmp in the target directory
TEMP_SUFFIX = ".tmp"

# Specifiers under this prefix are resolved by the runtime, never on disk
ASSET_PREFIX = "/$asset$/"

REMOTE_SCHEMES = ("http", "https")

ROOT_ENV_VAR = "MODCACHE_DIR"
