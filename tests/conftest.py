"""Shared test fixtures and test doubles for the proxygen test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable

import httpx
import pytest

from proxygen.config.settings import ProxygenSettings
from proxygen.config.sources import SourceDescriptor, SourceKind, TextFormat
from proxygen.sources.cache import TtlCache
from proxygen.sources.fetcher import SourceFetcher

# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------

TXT_URL = "https://lists.example.test/proxyList.txt"
JSON_URL = "https://lists.example.test/KvProxyList.json"
CSV_URL = "https://lists.example.test/providers.csv"

TXT_BODY = """\
# loose list
203.0.113.5:8080 | Singapore Node
198.51.100.7 - 2053 Tokyo, JP
192.0.2.1 Frankfurt
not a proxy line
"""

JSON_BODY = {
    "items": [
        {"host": "1.1.1.1", "port": "8443", "name": "X"},
        {"ip": "203.0.113.5", "port": 8080, "remark": "duplicate of txt"},
        "192.0.2.50:2096 [Jakarta]",
    ]
}

CSV_BODY = """\
203.0.113.9,443,sg,Provider One
198.51.100.20,8443,jp,Provider, With Comma
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingTransport(httpx.MockTransport):
    """MockTransport serving a fresh response per URL and recording requests."""

    def __init__(self, routes: dict[str, Callable[[], httpx.Response]]) -> None:
        self.calls: list[str] = []
        self._routes = routes
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        route = self._routes.get(url)
        if route is None:
            return httpx.Response(404, text="not found")
        return route()


def sequential_credentials(prefix: str = "00000000-0000-4000-8000-") -> Callable[[], str]:
    """Deterministic credential factory yielding ...000000000001, ...02, etc."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter):012d}"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ProxygenSettings:
    """Test settings with safe defaults."""
    return ProxygenSettings(
        front_domain="cdn.example.com",
        sni="edge.example.com",
        sources_path="/nonexistent/sources.yaml",
        log_json=False,
    )


@pytest.fixture
def test_sources() -> list[SourceDescriptor]:
    return [
        SourceDescriptor(key="all", name="Everything", kind=SourceKind.MULTI, members=["txt", "json"]),
        SourceDescriptor(key="txt", name="proxyList.txt", kind=SourceKind.TEXT, url=TXT_URL),
        SourceDescriptor(key="json", name="KvProxyList.json", kind=SourceKind.JSON, url=JSON_URL),
        SourceDescriptor(
            key="csv",
            name="providers.csv",
            kind=SourceKind.TEXT,
            text_format=TextFormat.CSV,
            url=CSV_URL,
        ),
    ]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport(
        {
            TXT_URL: lambda: httpx.Response(200, text=TXT_BODY),
            JSON_URL: lambda: httpx.Response(200, json=JSON_BODY),
            CSV_URL: lambda: httpx.Response(200, text=CSV_BODY),
        }
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TtlCache:
    return TtlCache(ttl_seconds=600, clock=clock)


@pytest.fixture
def fetcher(
    test_sources: list[SourceDescriptor],
    cache: TtlCache,
    transport: RecordingTransport,
) -> SourceFetcher:
    return SourceFetcher(test_sources, cache, transport=transport)


@pytest.fixture
def make_transport() -> type[RecordingTransport]:
    """The transport class, for tests that need their own routes."""
    return RecordingTransport


@pytest.fixture
def credentials() -> Callable[[], str]:
    return sequential_credentials()
