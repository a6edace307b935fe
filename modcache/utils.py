"""General utils functions"""

import os
import tempfile
from pathlib import Path

from modcache.constants import TEMP_SUFFIX


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to path through a temp file in the same directory.

    Readers see either the previous file or the complete new one. Missing
    parent directories are created. The file gets the usual 0o666 mode
    filtered by the process umask.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=TEMP_SUFFIX
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def is_temp_file(path: Path) -> bool:
    """Check whether path is an in-flight temp file of atomic_write_text."""
    return path.name.startswith(".") and path.name.endswith(TEMP_SUFFIX)


def read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
