import io
import logging

import pytest

from modcache.dir import ModuleCacheDir


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("modcache")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


class FakeTransport:
    """Serves canned bodies by URL and records every request."""

    def __init__(self, bodies=None, error=None):
        self.bodies = dict(bodies or {})
        self.error = error
        self.calls = []

    def __call__(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.bodies[url]


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def cache_dir(tmp_path, transport):
    """A ModuleCacheDir rooted in a temp directory, offline."""
    return ModuleCacheDir.initialize(
        reload=False, custom_root=tmp_path / "cache", transport=transport
    )
