"""Shared test fixtures."""

from dataclasses import dataclass, field
from pathlib import Path

import bcrypt
import httpx
import pytest
from fastapi.testclient import TestClient

from studio_api.adapters.exchange_rate_client import ExchangeRateClient
from studio_api.api.app import create_app
from studio_api.config import Settings
from studio_api.containers import AppContainer
from studio_api.domain.documents import (
    DEFAULT_CATALOG,
    DEFAULT_PLAYLIST,
    Document,
    DocumentKind,
)
from studio_api.services.auth import AuthService
from studio_api.services.cache import InMemoryCache
from studio_api.services.catalog import CatalogService
from studio_api.services.currency import CurrencyService
from studio_api.services.documents import DocumentStore
from studio_api.services.playlist import PlaylistService
from studio_api.services.rate_limits import RateLimits
from studio_api.services.uploads import UploadService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse"
ADMIN_PASSWORD_HASH = bcrypt.hashpw(
    ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)
).decode("utf-8")


@dataclass
class InMemoryDocumentStore(DocumentStore):
    """In-memory document store for tests."""

    documents: dict[DocumentKind, Document] = field(default_factory=dict)
    fail_saves: bool = False
    save_calls: int = 0

    def load(self, kind: DocumentKind) -> Document:
        if kind in self.documents:
            return self.documents[kind]
        return DEFAULT_CATALOG if kind is DocumentKind.CATALOG else DEFAULT_PLAYLIST

    def save(self, kind: DocumentKind, document: Document) -> bool:
        self.save_calls += 1
        if self.fail_saves:
            return False
        self.documents[kind] = document
        return True


@dataclass
class FakeExchangeRateClient(ExchangeRateClient):
    """Fake rate provider returning fixed payloads per base currency."""

    payloads: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            "USD": {
                "base": "USD",
                "rates": {"USD": 1, "VND": 25000.5, "GBP": 0.8, "EUR": 0.92},
            }
        }
    )
    calls: list[str] = field(default_factory=list)

    async def latest(self, base: str) -> dict[str, object]:
        self.calls.append(base)
        if base not in self.payloads:
            request = httpx.Request("GET", f"https://rates.test/latest/{base}")
            raise httpx.HTTPStatusError(
                "not found",
                request=request,
                response=httpx.Response(404, request=request),
            )
        return self.payloads[base]


@dataclass
class UnreachableExchangeRateClient(ExchangeRateClient):
    """Rate provider that always fails at the network level."""

    calls: int = 0

    async def latest(self, base: str) -> dict[str, object]:
        self.calls += 1
        raise httpx.ConnectError("connection refused")


def login(client: TestClient) -> None:
    response = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        admin_username=ADMIN_USERNAME,
        admin_password_hash=ADMIN_PASSWORD_HASH,
        session_secret="test-secret",
        data_dir=tmp_path / "data",
        assets_dir=tmp_path / "assets" / "gallery",
        rate_limit_general=1000,
        rate_limit_strict=1000,
        environment="test",
    )


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def rate_client() -> FakeExchangeRateClient:
    return FakeExchangeRateClient()


def build_test_container(
    settings: Settings,
    document_store: DocumentStore,
    rate_client: ExchangeRateClient,
) -> AppContainer:
    auth_service = AuthService(
        username=settings.admin_username,
        password_hash=ADMIN_PASSWORD_HASH.encode("utf-8"),
        secret="test-secret",
        sessions=InMemoryCache(),
        session_ttl_seconds=settings.session_max_age_seconds,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        catalog_service=CatalogService(document_store),
        playlist_service=PlaylistService(document_store),
        upload_service=UploadService(
            assets_dir=settings.assets_dir,
            url_prefix=settings.asset_url_prefix,
            max_bytes=settings.max_upload_bytes,
        ),
        currency_service=CurrencyService(client=rate_client, cache=InMemoryCache()),
        rate_limits=RateLimits.create(
            window_seconds=settings.rate_limit_window_seconds,
            general_limit=settings.rate_limit_general,
            strict_limit=settings.rate_limit_strict,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def container(
    settings: Settings,
    document_store: InMemoryDocumentStore,
    rate_client: FakeExchangeRateClient,
) -> AppContainer:
    return build_test_container(settings, document_store, rate_client)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
