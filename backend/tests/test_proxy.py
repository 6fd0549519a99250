"""
Tests for the key-injecting proxy: key handling, parameter forwarding,
relay of status/body, and error bodies.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeResponse, FakeSession, connection_error
from moviereview.main import app
from moviereview.core.config import get_settings
from moviereview.routers.proxy import get_http_session, get_proxy_service
from moviereview.services.proxy_service import ProxyService

client = TestClient(app)


@pytest.fixture
def proxy(settings):
    """Install a ProxyService over a fake session; returns the session"""
    def _install(routes=None, api_key="server-secret", vite_key=""):
        session = FakeSession(routes)
        configured = settings.model_copy(update={"TMDB_API_KEY": api_key, "VITE_TMDB_API_KEY": vite_key})
        app.dependency_overrides[get_proxy_service] = lambda: ProxyService(configured, session=session)
        return session
    yield _install
    app.dependency_overrides.clear()


def test_missing_key_returns_500_without_upstream_call(proxy):
    session = proxy({"movie/27205": {"id": 27205}}, api_key="")

    response = client.get("/api/movie/27205")

    assert response.status_code == 500
    assert "error" in response.json()
    assert session.calls == []


def test_forwards_path_and_injects_key(proxy):
    session = proxy({"movie/popular": {"page": 2, "results": []}})

    response = client.get("/api/movie/popular?page=2&language=en-US")

    assert response.status_code == 200
    assert response.json() == {"page": 2, "results": []}
    call = session.calls[0]
    assert call["url"] == "https://api.themoviedb.org/3/movie/popular"
    assert call["params"] == {"page": "2", "language": "en-US", "api_key": "server-secret"}
    assert call["headers"] == {"Accept": "application/json"}


def test_client_supplied_key_is_never_forwarded(proxy):
    session = proxy({"search/movie": {"results": []}})

    client.get("/api/search/movie?query=Inception&api_key=stolen&API_KEY=other")

    params = session.calls[0]["params"]
    assert params["api_key"] == "server-secret"
    assert "API_KEY" not in params
    assert params["query"] == "Inception"


def test_vite_prefixed_key_takes_precedence(proxy):
    session = proxy({"genre/movie/list": {"genres": []}}, api_key="plain", vite_key="vite")

    client.get("/api/genre/movie/list")

    assert session.calls[0]["params"]["api_key"] == "vite"


def test_upstream_status_is_relayed(proxy):
    proxy({"movie/0": FakeResponse(404, {"status_code": 34, "status_message": "not found"})})

    response = client.get("/api/movie/0")

    assert response.status_code == 404
    assert response.json()["status_code"] == 34


def test_non_json_body_passes_through(proxy):
    proxy({"image/poster.jpg": FakeResponse(200, content=b"\xff\xd8jpeg", content_type="image/jpeg")})

    response = client.get("/api/image/poster.jpg")

    assert response.status_code == 200
    assert response.content == b"\xff\xd8jpeg"
    assert response.headers["content-type"] == "image/jpeg"


def test_network_failure_returns_error_with_details(proxy):
    proxy({"movie/popular": connection_error("upstream down")})

    response = client.get("/api/movie/popular")

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "API fetch failed"
    assert "upstream down" in body["details"]


def test_undecodable_json_returns_proxy_error(proxy):
    proxy({"movie/popular": FakeResponse(200, content=b"{not json", content_type="application/json")})

    response = client.get("/api/movie/popular")

    assert response.status_code == 500
    assert response.json()["error"] == "Proxy error"
    assert response.json()["details"]


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_requests_share_one_upstream_session(settings):
    session = FakeSession({"movie/popular": {"results": []}, "movie/27205": {"id": 27205}})
    configured = settings.model_copy(update={"TMDB_API_KEY": "server-secret"})
    app.dependency_overrides[get_settings] = lambda: configured
    app.dependency_overrides[get_http_session] = lambda: session
    try:
        assert client.get("/api/movie/popular").status_code == 200
        assert client.get("/api/movie/27205").status_code == 200
    finally:
        app.dependency_overrides.clear()

    assert [c["url"].rsplit("/3/", 1)[1] for c in session.calls] == ["movie/popular", "movie/27205"]


def test_http_session_is_created_once():
    assert get_http_session() is get_http_session()


def test_run_serves_the_proxy_app(monkeypatch):
    from moviereview import run

    served = {}
    monkeypatch.setenv("PORT", "9001")
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: served.update(app=app, **kwargs))

    run.main()

    assert served == {"app": "moviereview.main:app", "host": "0.0.0.0", "port": 9001}
