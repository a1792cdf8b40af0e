"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from studio_api.adapters.exchange_rate_client import HttpxExchangeRateClient
from studio_api.adapters.json_document_store import JsonFileDocumentStore
from studio_api.config import (
    Settings,
    resolve_password_hash,
    resolve_session_secret,
)
from studio_api.services.auth import AuthService
from studio_api.services.cache import InMemoryCache
from studio_api.services.catalog import CatalogService
from studio_api.services.currency import CurrencyService
from studio_api.services.playlist import PlaylistService
from studio_api.services.rate_limits import RateLimits
from studio_api.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    catalog_service: CatalogService
    playlist_service: PlaylistService
    upload_service: UploadService
    currency_service: CurrencyService
    rate_limits: RateLimits
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    document_store = JsonFileDocumentStore(
        catalog_path=resolved_settings.gallery_file,
        playlist_path=resolved_settings.playlist_file,
    )
    auth_service = AuthService(
        username=resolved_settings.admin_username,
        password_hash=resolve_password_hash(resolved_settings),
        secret=resolve_session_secret(resolved_settings),
        sessions=InMemoryCache(),
        session_ttl_seconds=resolved_settings.session_max_age_seconds,
    )
    exchange_rate_client = HttpxExchangeRateClient.create(
        base_url=resolved_settings.exchange_rate_base_url,
        api_key=resolved_settings.exchange_rate_api_key,
        keyed_base_url=resolved_settings.exchange_rate_keyed_base_url,
        timeout=resolved_settings.currency_timeout_seconds,
    )
    currency_service = CurrencyService(
        client=exchange_rate_client,
        cache=InMemoryCache(),
        cache_ttl_seconds=resolved_settings.currency_cache_ttl_seconds,
    )
    upload_service = UploadService(
        assets_dir=resolved_settings.assets_dir,
        url_prefix=resolved_settings.asset_url_prefix,
        max_bytes=resolved_settings.max_upload_bytes,
    )
    rate_limits = RateLimits.create(
        window_seconds=resolved_settings.rate_limit_window_seconds,
        general_limit=resolved_settings.rate_limit_general,
        strict_limit=resolved_settings.rate_limit_strict,
    )

    async def close_resources() -> None:
        await exchange_rate_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        catalog_service=CatalogService(document_store),
        playlist_service=PlaylistService(document_store),
        upload_service=upload_service,
        currency_service=currency_service,
        rate_limits=rate_limits,
        close_resources=close_resources,
    )
