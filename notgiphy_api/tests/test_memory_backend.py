from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import RacingStore, login, register


def test_memory_backend_end_to_end(memory_client: TestClient):
    c = memory_client
    assert register(c).status_code == 200
    assert register(c).status_code == 400

    assert c.post("/api/favorites", json={"id": "b", "url": "u"}).status_code == 201
    assert c.post("/api/favorites", json={"id": "a", "url": "u"}).status_code == 201
    assert c.post("/api/favorites", json={"id": "a", "url": "u"}).status_code == 400
    assert c.post("/api/tags", json={"favorite": "b", "tag": "funny"}).status_code == 201
    assert c.post("/api/tags", json={"favorite": "x", "tag": "funny"}).status_code == 400

    assert [g["id"] for g in c.get("/api/favorites").json()] == ["a", "b"]
    assert [g["id"] for g in c.get("/api/favorites", params={"tag": "funny"}).json()] == ["b"]
    assert c.get("/api/tags").json() == [{"favorite": "b", "tag": "funny"}]

    assert c.delete("/api/favorites", params={"id": "b"}).status_code == 204
    assert c.get("/api/tags").json() == []

    c.cookies.clear()
    assert c.get("/api/favorites").status_code == 401
    assert login(c, password="wrong").status_code == 401
    assert login(c).status_code == 200
    assert [g["id"] for g in c.get("/api/favorites").json()] == ["a"]


def test_login_conflict_is_reported(memory_client: TestClient):
    store = RacingStore()
    memory_client.app.state.memory_store = store
    assert register(memory_client).status_code == 200

    store.races = 1
    assert login(memory_client).status_code == 200

    store.races = 2
    resp = login(memory_client)
    assert resp.status_code == 409
    assert resp.json()["error"]["message"] == "Concurrent login, try again"
