"""
Shared fixtures: settings without a real environment and fake HTTP sessions
standing in for `requests.Session`, so no test touches the network.
"""

import json
import threading

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from moviereview.core.config import Settings
from moviereview.core.tmdb_service import MovieServiceFactory
from moviereview.storage import LocalStore, MemoryStorage
from moviereview.ui.context import ViewContext
from moviereview.ui.controller import Controller


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=None, content_type="application/json"):
        self.status_code = status_code
        self.payload = payload
        self.headers = CaseInsensitiveDict()
        if content_type:
            self.headers["Content-Type"] = content_type
        if content is None:
            content = json.dumps(payload).encode("utf-8") if payload is not None else b""
        self.content = content

    @property
    def ok(self):
        return self.status_code < 400

    @property
    def text(self):
        return self.content.decode("utf-8", errors="replace")

    def json(self):
        return json.loads(self.content)


class FakeSession:
    """Answers GETs from a route table keyed by URL suffix.

    A route value may be a payload (served as JSON 200), a FakeResponse, or
    an exception instance to raise.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.headers = {}
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, params=None, headers=None, timeout=None):
        with self._lock:
            self.calls.append({"url": url, "params": dict(params or {}), "headers": headers})
        for suffix in sorted(self.routes, key=len, reverse=True):
            if url.endswith("/" + suffix):
                route = self.routes[suffix]
                if isinstance(route, Exception):
                    raise route
                if isinstance(route, FakeResponse):
                    return route
                return FakeResponse(200, route)
        return FakeResponse(404, {"status_message": "not found"})

    def paths(self):
        return [c["url"] for c in self.calls]


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        TMDB_API_KEY="",
        VITE_TMDB_API_KEY="",
        PROXY_BASE_URL="http://proxy.test/api",
        DEBOUNCE_DELAY=0.01,
        STORAGE_BACKEND="memory",
    )


@pytest.fixture
def make_movie():
    def _make(movie_id, title=None, **fields):
        movie = {
            "id": movie_id,
            "title": title or f"Movie {movie_id}",
            "poster_path": f"/poster{movie_id}.jpg",
            "release_date": "2010-07-16",
            "vote_average": 7.5,
            "popularity": 10.0,
        }
        movie.update(fields)
        return movie
    return _make


@pytest.fixture
def make_controller(settings):
    """Controller over a fake session; returns (controller, session)"""
    def _make(routes, viewport_width=1280):
        session = FakeSession(routes)
        service = MovieServiceFactory.create_movie_service(settings, session=session)
        view = ViewContext(settings, viewport_width=viewport_width)
        controller = Controller(view, LocalStore(MemoryStorage()), movie_service=service, settings=settings)
        return controller, session
    return _make


def page_of(movies, total_pages=1, total_results=None):
    return {
        "results": movies,
        "total_pages": total_pages,
        "total_results": len(movies) if total_results is None else total_results,
    }


def connection_error(message="connection refused"):
    return requests.exceptions.ConnectionError(message)
