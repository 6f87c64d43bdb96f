from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from src.api.main import create_app
from src.clients.giphy import GiphyClient
from src.core.settings import AppSettings

UI_ORIGIN = "http://localhost:4200"


def _preflight(client: TestClient, origin: str):
    return client.options(
        "/api/favorites",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
    )


def test_preflight_from_ui_origin(client: TestClient):
    resp = _preflight(client, UI_ORIGIN)
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == UI_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"
    allowed = {m.strip() for m in resp.headers["access-control-allow-methods"].split(",")}
    assert {"GET", "POST", "PUT", "DELETE"} <= allowed


def test_preflight_from_other_origin_is_refused(client: TestClient):
    resp = _preflight(client, "http://evil.test")
    assert resp.status_code == 400
    assert "access-control-allow-origin" not in resp.headers


def test_simple_request_echoes_allowed_origin(client: TestClient):
    resp = client.get("/api/health", headers={"Origin": UI_ORIGIN})
    assert resp.headers["access-control-allow-origin"] == UI_ORIGIN
    assert resp.headers["access-control-allow-credentials"] == "true"

    other = client.get("/api/health", headers={"Origin": "http://evil.test"})
    assert "access-control-allow-origin" not in other.headers


def test_wildcard_origins_disable_credentials(
    static_dir: Path, database_url: str, gif_client: GiphyClient
):
    settings = AppSettings(
        CORS_ORIGINS=["*"],
        CORS_ALLOW_CREDENTIALS=True,
        RUN_MIGRATIONS_ON_STARTUP=False,
        CREATE_SCHEMA_ON_STARTUP=True,
        STATIC_DIR=str(static_dir),
    )
    with TestClient(create_app(settings, gif_client=gif_client)) as c:
        resp = _preflight(c, "http://anywhere.test")
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in resp.headers
