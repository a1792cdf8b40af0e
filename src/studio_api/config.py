"""Application configuration."""

import logging
import os
from pathlib import Path

import bcrypt
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_DEFAULT_ALLOWED_ORIGINS = ",".join(
    [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://phuongthustudio.com",
        "https://www.phuongthustudio.com",
        "https://phuongthu.pages.dev",
    ]
)

_DEV_ADMIN_PASSWORD = "admin123"
_DEV_SESSION_SECRET = "dev-session-secret-change-me"

_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    admin_username: str = "admin"
    admin_password_hash: str | None = None
    session_secret: str | None = None
    session_max_age_seconds: int = 24 * 60 * 60
    session_cookie_name: str = "studio.sid"
    cookie_secure: bool = False
    allowed_origins: str | None = None
    exchange_rate_api_key: str | None = None
    exchange_rate_base_url: str = "https://api.exchangerate-api.com/v4"
    exchange_rate_keyed_base_url: str = "https://v6.exchangerate-api.com/v6"
    currency_timeout_seconds: float = 5.0
    currency_cache_ttl_seconds: int = 600
    data_dir: Path = Path("data")
    assets_dir: Path = Path("assets/gallery")
    asset_url_prefix: str = "assets/gallery"
    max_upload_bytes: int = 10 * 1024 * 1024
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_general: int = 100
    rate_limit_strict: int = 10
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def gallery_file(self) -> Path:
        return self.data_dir / "gallery-data.json"

    @property
    def playlist_file(self) -> Path:
        return self.data_dir / "playlist-data.json"


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated CORS origin list from env."""
    source = _DEFAULT_ALLOWED_ORIGINS if raw is None else raw
    return [origin.strip() for origin in source.split(",") if origin.strip()]


def resolve_password_hash(settings: Settings) -> bytes:
    """Return the admin bcrypt hash, generating a dev hash for local runs."""
    if settings.admin_password_hash:
        return settings.admin_password_hash.encode("utf-8")
    if settings.environment != "local":
        raise RuntimeError("ADMIN_PASSWORD_HASH must be set outside local development")
    _logger.warning("ADMIN_PASSWORD_HASH not set, using the development password")
    return bcrypt.hashpw(_DEV_ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt())


def resolve_session_secret(settings: Settings) -> str:
    """Return the cookie signing secret, with a dev fallback for local runs."""
    if settings.session_secret:
        return settings.session_secret
    if settings.environment != "local":
        raise RuntimeError("SESSION_SECRET must be set outside local development")
    _logger.warning("SESSION_SECRET not set, using the development secret")
    return _DEV_SESSION_SECRET
