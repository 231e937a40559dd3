"""Shared pytest fixtures for the book catalog tests."""

from typing import Any, Dict, List, Optional

import httpx
import pytest

from app.catalog.cache import TTLCache
from app.catalog.openlibrary_service import OpenLibraryClient
from app.config import Settings


FAKE_BASE_URL = "https://openlibrary.test"


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeOpenLibrary:
    """Routes requests by URL path to canned responses and records them.

    A route is either ``(status_code, payload)`` or an exception instance
    to raise from the transport.  Unknown paths answer 404.
    """

    def __init__(self):
        self.routes: Dict[str, Any] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, payload: Any = None, status_code: int = 200) -> None:
        self.routes[path] = (status_code, payload)

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "notfound"})
        if isinstance(route, Exception):
            raise route
        status_code, payload = route
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status_code, content=payload)
        return httpx.Response(status_code, json=payload)

    def calls(self, path: Optional[str] = None) -> List[httpx.Request]:
        if path is None:
            return list(self.requests)
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache(ttl_seconds=60, clock=clock)


@pytest.fixture
def fake_ol():
    return FakeOpenLibrary()


@pytest.fixture
def catalog(fake_ol, cache):
    """OpenLibraryClient wired to the fake upstream."""
    http_client = httpx.AsyncClient(
        base_url=FAKE_BASE_URL, transport=httpx.MockTransport(fake_ol.handler)
    )
    return OpenLibraryClient(cache=cache, base_url=FAKE_BASE_URL, http_client=http_client)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="development",
        catalog_base_url=FAKE_BASE_URL,
        books_file=tmp_path / "books.json",
        log_dir=None,
        log_level="DEBUG",
    )


@pytest.fixture
def dune_search_payload():
    return {
        "numFound": 2,
        "docs": [
            {
                "key": "/works/OL893415W",
                "title": "Dune",
                "author_name": ["Frank Herbert"],
                "first_publish_year": 1965,
            },
            {
                "key": "/works/OL15358691W",
                "title": "Dune Messiah",
                "author_name": ["Frank Herbert", "Brian Herbert"],
            },
        ],
    }


@pytest.fixture
def dune_work_payload():
    return {
        "key": "/works/OL893415W",
        "title": "Dune",
        "description": {"type": "/type/text", "value": "Set on the desert planet Arrakis."},
        "first_publish_date": "August 1965",
        "authors": [
            {"author": {"key": "/authors/OL79034A"}, "type": {"key": "/type/author_role"}},
            {"author": {"key": "/authors/OL2A"}, "type": {"key": "/type/author_role"}},
        ],
    }
