from __future__ import annotations

from pathlib import Path
from typing import List

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import INDEX_HTML
from src.api.main import create_app
from src.api.routes.frontend import resolve_static_file
from src.clients.giphy import GiphyClient
from src.core.settings import AppSettings


def test_root_serves_index(client: TestClient):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.text == INDEX_HTML
    assert resp.headers["content-type"].startswith("text/html")


def test_static_file_is_served(client: TestClient):
    resp = client.get("/js/main.js")
    assert resp.status_code == 200
    assert resp.text == "console.log('notgiphy');"


def test_stylesheet_has_css_content_type(client: TestClient):
    resp = client.get("/styles.css")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/css")


def test_client_side_routes_fall_back_to_index(client: TestClient):
    for path in ("/favorites", "/favorites/abc", "/missing.png"):
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert resp.text == INDEX_HTML


def test_root_query_runs_search(client: TestClient, giphy_requests: List[httpx.Request]):
    resp = client.get("/", params={"q": "dogs", "p": "2"})
    assert resp.status_code == 200
    assert [g["id"] for g in resp.json()] == ["dogs2", "dogs3"]
    assert giphy_requests[-1].url.params["offset"] == "2"


def test_existing_file_wins_over_query(client: TestClient, giphy_requests: List[httpx.Request]):
    resp = client.get("/styles.css", params={"q": "dogs"})
    assert resp.headers["content-type"].startswith("text/css")
    assert giphy_requests == []


def test_unknown_api_path_is_not_found(client: TestClient):
    assert client.get("/api/nope").status_code == 404
    assert client.get("/api").status_code == 404


def test_writes_to_unknown_api_paths_are_not_found(client: TestClient):
    assert client.post("/api/nope").status_code == 404
    assert client.delete("/api/nope").status_code == 404
    assert client.put("/api/nope/deeper").status_code == 404
    assert client.post("/api").status_code == 404
    resp = client.patch("/api/favorites")
    assert resp.status_code == 404
    assert resp.json()["error"]["type"] == "http_error"


def test_writes_to_ui_paths_are_not_allowed(client: TestClient):
    assert client.post("/").status_code == 405
    assert client.delete("/favorites").status_code == 405


def test_missing_index_is_server_error(
    tmp_path: Path, database_url: str, gif_client: GiphyClient
):
    empty = tmp_path / "empty"
    empty.mkdir()
    settings = AppSettings(
        RUN_MIGRATIONS_ON_STARTUP=False,
        CREATE_SCHEMA_ON_STARTUP=True,
        STATIC_DIR=str(empty),
    )
    with TestClient(create_app(settings, gif_client=gif_client)) as c:
        assert c.get("/").status_code == 500
        assert c.get("/api/health").status_code == 200


@pytest.mark.parametrize("request_path", ["../secret.txt", "js/../../secret.txt", "/../secret.txt"])
def test_paths_outside_static_dir_are_refused(static_dir: Path, request_path: str):
    assert resolve_static_file(static_dir.resolve(), request_path) is None


def test_resolve_static_file(static_dir: Path):
    root = static_dir.resolve()
    assert resolve_static_file(root, "js/main.js") == root / "js" / "main.js"
    assert resolve_static_file(root, "/styles.css") == root / "styles.css"
    assert resolve_static_file(root, "js") is None
    assert resolve_static_file(root, "") is None
