"""Tests for app-level endpoints and middleware."""

from fastapi.testclient import TestClient

from studio_api.api.app import create_app
from tests.conftest import build_test_container, login


def test_health(client) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["environment"] == "test"
    assert data["uptime"] >= 0
    assert data["timestamp"].endswith("Z")


def test_root_lists_endpoints(client) -> None:
    data = client.get("/").json()

    assert data["status"] == "OK"
    assert data["endpoints"]["gallery"] == "/api/gallery"


def test_security_headers_present(client) -> None:
    response = client.get("/api/gallery")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert "api.exchangerate-api.com" in response.headers["Content-Security-Policy"]


def test_cors_allows_configured_origin(client) -> None:
    response = client.options(
        "/api/gallery",
        headers={
            "Origin": "https://phuongthustudio.com",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert (
        response.headers["access-control-allow-origin"]
        == "https://phuongthustudio.com"
    )
    assert response.headers["access-control-allow-credentials"] == "true"


def test_malformed_body_is_bad_request(client) -> None:
    login(client)

    response = client.post(
        "/api/gallery/add",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()


def test_strict_limit_applies_to_admin_routes(
    settings, document_store, rate_client
) -> None:
    limited = settings.model_copy(update={"rate_limit_strict": 2})
    client = TestClient(
        create_app(build_test_container(limited, document_store, rate_client))
    )

    login(client)
    first = client.delete("/api/gallery/0")
    second = client.delete("/api/gallery/0")

    assert first.status_code == 200
    assert second.status_code == 429
    assert client.get("/api/gallery").status_code == 200


def test_general_limit_applies_to_all_routes(
    settings, document_store, rate_client
) -> None:
    limited = settings.model_copy(update={"rate_limit_general": 3})
    client = TestClient(
        create_app(build_test_container(limited, document_store, rate_client))
    )

    statuses = [client.get("/api/gallery").status_code for _ in range(4)]

    assert statuses == [200, 200, 200, 429]
