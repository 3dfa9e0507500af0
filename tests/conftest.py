"""Test configuration and fixtures.

Provides reusable fixtures for:
- Mocked HTTP backends (httpx.MockTransport)
- Fake backends that route and record requests
- Sample LRC documents
"""

import logging
import os

import httpx
import pytest

from lrcfetch import config
from lrcfetch.core.http import create_http_client


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords or "integration" in item.keywords:
            item.add_marker(skip_network)


@pytest.fixture(autouse=True)
def no_retry_delay(monkeypatch):
    """Keep retry backoff from slowing tests down."""
    monkeypatch.setattr(config, "RETRY_DELAY", 0.0)


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers attached by setup_logging."""
    yield
    logger = logging.getLogger("lrcfetch")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


# =============================================================================
# HTTP Fixtures
# =============================================================================


class FakeBackend:
    """Routes mocked requests by URL (without query) and records them.

    Each route holds a list of responses consumed in order; the last one
    is reused once the list runs out. A response may be an httpx.Response,
    an exception to raise, or a callable taking the request.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, url, *responses):
        self.routes.setdefault(url, []).extend(responses)
        return self

    def calls_to(self, url):
        return [r for r in self.requests if _route_key(r) == url]

    def __call__(self, request):
        self.requests.append(request)
        queue = self.routes.get(_route_key(request))
        if not queue:
            return httpx.Response(404, text="not mocked")

        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        # Rebuild so a reused response is never consumed twice
        return httpx.Response(
            response.status_code, headers=response.headers, content=response.content
        )


def _route_key(request):
    url = request.url
    return f"{url.scheme}://{url.host}{url.path}"


@pytest.fixture
def backend():
    """An empty fake backend; add routes per test."""
    return FakeBackend()


@pytest.fixture
def make_client():
    """Factory for an async client wired to a handler."""
    def _make(handler):
        return create_http_client(transport=httpx.MockTransport(handler))
    return _make


# =============================================================================
# LRC Fixtures
# =============================================================================


@pytest.fixture
def sample_lrc():
    """A small LRC document with metadata, a comment and an invalid line."""
    return (
        "[ti:Never Gonna Give You Up]\n"
        "[ar:Rick Astley]\n"
        "[al:Whenever You Need Somebody]\n"
        "[length:03:32]\n"
        "[offset:+250]\n"
        "# fetched for tests\n"
        "[00:18.80]We're no strangers to love\n"
        "[00:22.86]You know the rules and so do I\n"
        "this line has no tag\n"
        "[00:27.04]A full commitment's what I'm thinking of\n"
    )


@pytest.fixture
def kugou_lrc():
    """Raw KuGou LRC with the header lines it usually carries."""
    return (
        "[id:$00000000]\n"
        "[ar:Rick Astley]\n"
        "[ti:Never Gonna Give You Up]\n"
        "[by:]\n"
        "[hash:0123456789abcdef]\n"
        "[al:]\n"
        "[sign:]\n"
        "[qq:]\n"
        "[total:212000]\n"
        "[offset:0]\n"
        "[00:00.00]Rick Astley - Never Gonna Give You Up\n"
        "[00:01.00]Written by：Stock, Aitken, Waterman\n"
        "[00:18.80]We&apos;re no strangers to love\n"
        "[00:22.86]You know the rules and so do I\n"
    )
