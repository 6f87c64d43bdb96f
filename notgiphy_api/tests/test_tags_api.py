from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def favorites(alice: TestClient) -> TestClient:
    for gif_id in ("a", "b", "c"):
        resp = alice.post("/api/favorites", json={"id": gif_id, "url": f"https://giphy.com/gifs/{gif_id}"})
        assert resp.status_code == 201
    return alice


def test_create_tag(favorites: TestClient):
    resp = favorites.post("/api/tags", json={"favorite": "a", "tag": "funny"})
    assert resp.status_code == 201
    assert resp.json() == {"favorite": "a", "tag": "funny"}


def test_tag_unknown_favorite_is_rejected(favorites: TestClient):
    resp = favorites.post("/api/tags", json={"favorite": "zzz", "tag": "funny"})
    assert resp.status_code == 400


def test_duplicate_tag_is_rejected(favorites: TestClient):
    favorites.post("/api/tags", json={"favorite": "a", "tag": "funny"})
    resp = favorites.post("/api/tags", json={"favorite": "a", "tag": "funny"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Tag funny already exists on a"


def test_empty_tag_fails_validation(favorites: TestClient):
    assert favorites.post("/api/tags", json={"favorite": "a", "tag": ""}).status_code == 422


def test_list_tags_of_one_favorite(favorites: TestClient):
    for name in ("zany", "cute", "loop"):
        favorites.post("/api/tags", json={"favorite": "b", "tag": name})
    favorites.post("/api/tags", json={"favorite": "a", "tag": "other"})

    resp = favorites.get("/api/tags", params={"favorite": "b"})
    assert resp.status_code == 200
    assert resp.json() == [
        {"favorite": "b", "tag": "cute"},
        {"favorite": "b", "tag": "loop"},
        {"favorite": "b", "tag": "zany"},
    ]


def test_list_distinct_tags(favorites: TestClient):
    favorites.post("/api/tags", json={"favorite": "c", "tag": "funny"})
    favorites.post("/api/tags", json={"favorite": "b", "tag": "funny"})
    favorites.post("/api/tags", json={"favorite": "c", "tag": "cute"})

    resp = favorites.get("/api/tags")
    assert resp.status_code == 200
    assert resp.json() == [
        {"favorite": "c", "tag": "cute"},
        {"favorite": "b", "tag": "funny"},
    ]


def test_delete_tag(favorites: TestClient):
    favorites.post("/api/tags", json={"favorite": "a", "tag": "funny"})
    favorites.post("/api/tags", json={"favorite": "a", "tag": "cute"})

    resp = favorites.delete("/api/tags", params={"favorite": "a", "tag": "funny"})
    assert resp.status_code == 204
    assert favorites.get("/api/tags", params={"favorite": "a"}).json() == [{"favorite": "a", "tag": "cute"}]

    # the favorite itself stays
    assert favorites.get("/api/favorites", params={"id": "a"}).status_code == 200


def test_delete_unknown_tag_succeeds(favorites: TestClient):
    assert favorites.delete("/api/tags", params={"favorite": "a", "tag": "ghost"}).status_code == 204


def test_delete_tag_requires_both_keys(favorites: TestClient):
    assert favorites.delete("/api/tags", params={"favorite": "a"}).status_code == 422
    assert favorites.delete("/api/tags", params={"tag": "funny"}).status_code == 422
