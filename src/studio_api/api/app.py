"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware

from studio_api.api.auth import client_ip
from studio_api.api.auth import router as auth_router
from studio_api.api.currency import router as currency_router
from studio_api.api.errors import error_response, register_error_handlers
from studio_api.api.gallery import router as gallery_router
from studio_api.api.uploads import router as uploads_router
from studio_api.app_logging import configure_logging
from studio_api.config import parse_allowed_origins
from studio_api.containers import AppContainer
from studio_api.services.documents import format_timestamp, utcnow

_CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com "
        "https://cdn.tailwindcss.com",
        "font-src 'self' https://fonts.gstatic.com",
        "img-src 'self' data: https:",
        "script-src 'self' 'unsafe-inline' https://cdn.tailwindcss.com",
        "script-src-attr 'unsafe-inline'",
        "connect-src 'self' https://api.exchangerate-api.com",
    ]
)

_SECURITY_HEADERS = {
    "Content-Security-Policy": _CONTENT_SECURITY_POLICY,
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    started_at = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Studio API starting (environment=%s)", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Studio API", lifespan=lifespan)
    app.state.container = container

    register_error_handlers(app)

    @app.middleware("http")
    async def general_rate_limit(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if not container.rate_limits.allow_request(client_ip(request)):
            return error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "Too many requests from this IP, please try again later.",
            )
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        for header, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    app.include_router(auth_router)
    app.include_router(gallery_router)
    app.include_router(uploads_router)
    app.include_router(currency_router)

    @app.get("/")
    async def root() -> dict[str, object]:
        """Describe the service and its main endpoints."""
        return {
            "message": "Studio API is running!",
            "status": "OK",
            "endpoints": {
                "health": "/api/health",
                "gallery": "/api/gallery",
                "playlist": "/api/playlist",
            },
        }

    @app.get("/api/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return {
            "status": "OK",
            "timestamp": format_timestamp(utcnow()),
            "uptime": round(time.monotonic() - started_at, 3),
            "environment": container.settings.environment,
        }

    return app
