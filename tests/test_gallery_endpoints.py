"""Tests for catalog and playlist endpoints."""

from studio_api.domain.documents import DEFAULT_CATALOG, DEFAULT_PLAYLIST
from tests.conftest import login


def test_get_gallery_returns_default_document(client) -> None:
    response = client.get("/api/gallery")

    assert response.status_code == 200
    data = response.json()
    assert len(data["galleryData"]) == len(DEFAULT_CATALOG.items)
    assert data["galleryData"][0] == {
        "path": "assets/gallery/bg-img2.JPG",
        "price": "$299",
        "status": "available",
    }
    assert data["lastUpdated"].endswith("Z")


def test_add_requires_authentication(client, document_store) -> None:
    response = client.post(
        "/api/gallery/add", json={"path": "a.jpg", "status": "available"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}
    assert document_store.save_calls == 0


def test_add_after_login(client) -> None:
    login(client)

    response = client.post(
        "/api/gallery/add", json={"path": "assets/gallery/new.jpg", "status": "sold"}
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Item added successfully!"}
    items = client.get("/api/gallery").json()["galleryData"]
    assert items[-1] == {
        "path": "assets/gallery/new.jpg",
        "price": "$299",
        "status": "sold",
    }


def test_add_rejects_missing_status(client) -> None:
    login(client)

    response = client.post("/api/gallery/add", json={"path": "a.jpg"})

    assert response.status_code == 400
    assert response.json() == {"error": "Path and status are required"}


def test_update_item_defaults_images(client) -> None:
    login(client)

    response = client.put(
        "/api/gallery/2",
        json={"path": "assets/gallery/x.jpg", "price": "$400", "status": "sold"},
    )

    assert response.status_code == 200
    item = client.get("/api/gallery").json()["galleryData"][2]
    assert item == {
        "path": "assets/gallery/x.jpg",
        "images": ["assets/gallery/x.jpg"],
        "price": "$400",
        "status": "sold",
    }


def test_update_rejects_bad_index(client) -> None:
    login(client)
    body = {"path": "a.jpg", "status": "available"}

    bad = client.put("/api/gallery/abc", json=body)
    assert bad.json() == {"error": "Invalid index"}
    assert client.put("/api/gallery/-1", json=body).status_code == 400
    assert client.put("/api/gallery/1_0", json=body).status_code == 400
    out_of_range = client.put("/api/gallery/99", json=body)
    assert out_of_range.status_code == 400
    assert out_of_range.json() == {"error": "Index out of range"}


def test_delete_item_shifts_positions(client) -> None:
    login(client)
    before = client.get("/api/gallery").json()["galleryData"]

    response = client.delete("/api/gallery/0")

    assert response.status_code == 200
    after = client.get("/api/gallery").json()["galleryData"]
    assert len(after) == len(before) - 1
    assert after == before[1:]


def test_replace_gallery(client) -> None:
    login(client)

    response = client.post(
        "/api/gallery",
        json={"galleryData": [{"path": "only.jpg", "status": "available", "id": 1}]},
    )

    assert response.status_code == 200
    assert client.get("/api/gallery").json()["galleryData"] == [
        {"id": 1, "path": "only.jpg", "price": "$299", "status": "available"}
    ]


def test_replace_gallery_rejects_missing_data(client) -> None:
    login(client)

    response = client.post("/api/gallery", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid gallery data"}


def test_replace_gallery_rejects_non_list(client) -> None:
    login(client)

    response = client.post("/api/gallery", json={"galleryData": "nope"})

    assert response.status_code == 400


def test_save_failure_returns_server_error(client, document_store) -> None:
    login(client)
    document_store.fail_saves = True

    response = client.delete("/api/gallery/0")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save data"}


def test_get_playlist_returns_default(client) -> None:
    data = client.get("/api/playlist").json()

    assert data["playlist"] == list(DEFAULT_PLAYLIST.entries)


def test_replace_playlist_limits(client) -> None:
    login(client)
    entries = [f"assets/gallery/p{n}.jpg" for n in range(100)]

    too_long = client.post("/api/playlist", json={"playlist": [*entries, "x.jpg"]})
    accepted = client.post("/api/playlist", json={"playlist": entries})

    assert too_long.status_code == 400
    assert too_long.json() == {"error": "Playlist too long"}
    assert accepted.status_code == 200
    assert client.get("/api/playlist").json()["playlist"] == entries


def test_replace_playlist_requires_authentication(client) -> None:
    response = client.post("/api/playlist", json={"playlist": []})

    assert response.status_code == 401
