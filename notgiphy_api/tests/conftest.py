from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.clients.giphy import GiphyClient
from src.core.settings import AppSettings
from src.core.errors import AlreadyExists
from src.repositories.memory import MemoryStore

GIPHY_BASE_URL = "https://giphy.test/v1"
INDEX_HTML = "<!doctype html><html><body><app-root></app-root></body></html>"


def gif_payload(gif_id: str) -> Dict:
    return {
        "type": "gif",
        "id": gif_id,
        "url": f"https://giphy.com/gifs/{gif_id}",
        "images": {
            "fixed_width_small_still": {"url": f"https://media.giphy.com/media/{gif_id}/100w_s.gif"},
            "downsized": {"url": f"https://media.giphy.com/media/{gif_id}/giphy-downsized.gif"},
            "original": {"url": f"https://media.giphy.com/media/{gif_id}/giphy.gif"},
        },
    }


def giphy_handler(request: httpx.Request) -> httpx.Response:
    """Fake Giphy: `missing` is unknown, `broken` fails, everything else exists."""
    path = request.url.path
    if path == "/v1/gifs/search":
        q = request.url.params["q"]
        if q == "broken":
            return httpx.Response(500, text="upstream exploded")
        offset = int(request.url.params["offset"])
        limit = int(request.url.params["limit"])
        data = [gif_payload(f"{q}{n}") for n in range(offset, offset + limit)]
        # Giphy occasionally returns entries without an id
        data.append({"type": "gif", "id": "", "images": {}})
        return httpx.Response(
            200,
            json={"data": data, "pagination": {"offset": offset, "count": limit}, "meta": {"status": 200}},
        )
    if path.startswith("/v1/gifs/"):
        gif_id = path.rsplit("/", 1)[1]
        if gif_id == "missing":
            return httpx.Response(404, json={"data": [], "meta": {"status": 404, "msg": "Not Found"}})
        if gif_id == "broken":
            return httpx.Response(500, text="upstream exploded")
        return httpx.Response(200, json={"data": gif_payload(gif_id), "meta": {"status": 200}})
    return httpx.Response(404, json={"meta": {"status": 404}})


@pytest.fixture()
def giphy_requests() -> List[httpx.Request]:
    return []


@pytest.fixture()
def gif_client(giphy_requests: List[httpx.Request]) -> GiphyClient:
    def handler(request: httpx.Request) -> httpx.Response:
        giphy_requests.append(request)
        return giphy_handler(request)

    return GiphyClient(
        "test-key",
        per_page=2,
        base_url=GIPHY_BASE_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture()
def static_dir(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    (root / "js").mkdir(parents=True)
    (root / "index.html").write_text(INDEX_HTML)
    (root / "styles.css").write_text("body { margin: 0; }")
    (root / "js" / "main.js").write_text("console.log('notgiphy');")
    (tmp_path / "secret.txt").write_text("do not serve")
    return root


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


@pytest.fixture()
def settings(static_dir: Path, database_url: str) -> AppSettings:
    return AppSettings(
        STORE_BACKEND="sql",
        RUN_MIGRATIONS_ON_STARTUP=False,
        CREATE_SCHEMA_ON_STARTUP=True,
        STATIC_DIR=str(static_dir),
    )


@pytest.fixture()
def client(settings: AppSettings, gif_client: GiphyClient):
    app = create_app(settings, gif_client=gif_client)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def memory_client(static_dir: Path, gif_client: GiphyClient):
    settings = AppSettings(STORE_BACKEND="memory", STATIC_DIR=str(static_dir))
    app = create_app(settings, gif_client=gif_client)
    with TestClient(app) as c:
        yield c


class RacingStore(MemoryStore):
    """Fails the next `races` session inserts as if another login won the unique constraint."""

    def __init__(self, races: int = 0) -> None:
        super().__init__()
        self.races = races

    async def session_replace(self, user, token):
        if self.races:
            self.races -= 1
            raise AlreadyExists("uq_sessions_user")
        return await super().session_replace(user, token)


def register(client: TestClient, user: str = "alice", password: str = "s3cret") -> httpx.Response:
    return client.put("/api/auth", data={"user": user, "password": password})


def login(client: TestClient, user: str = "alice", password: str = "s3cret") -> httpx.Response:
    return client.post("/api/auth", data={"user": user, "password": password})


@pytest.fixture()
def alice(client: TestClient) -> TestClient:
    """The SQL-backed client, logged in as alice."""
    assert register(client).status_code == 200
    return client
