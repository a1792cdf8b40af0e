"""Admin login endpoints and the session gate for mutating routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, Response

from studio_api.api.models import LoginRequest
from studio_api.domain.errors import PersistenceError, RateLimitExceededError
from studio_api.domain.sessions import SessionRecord  # noqa: TC001

if TYPE_CHECKING:
    from studio_api.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _session_cookie(request: Request) -> str | None:
    container = _container(request)
    return request.cookies.get(container.settings.session_cookie_name)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


async def enforce_strict_limit(request: Request) -> None:
    """Apply the tighter per-IP ceiling used for admin operations."""
    if not _container(request).rate_limits.allow_mutation(client_ip(request)):
        raise RateLimitExceededError(
            "Too many admin requests from this IP, please try again later."
        )


async def require_auth(request: Request) -> SessionRecord:
    """Ensure the request carries a live admin session."""
    container = _container(request)
    return container.auth_service.require_session(_session_cookie(request))


@router.post("/login", dependencies=[Depends(enforce_strict_limit)])
def login(
    payload: LoginRequest, request: Request, response: Response
) -> dict[str, object]:
    """Verify the admin credential and start a session."""
    container = _container(request)
    cookie = container.auth_service.login(payload.username, payload.password)
    response.set_cookie(
        key=container.settings.session_cookie_name,
        value=cookie,
        max_age=container.settings.session_max_age_seconds,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
    )
    return {"success": True, "message": "Login successful"}


@router.post("/logout")
async def logout(request: Request, response: Response) -> dict[str, object]:
    """Destroy the current session, if any."""
    container = _container(request)
    if not container.auth_service.logout(_session_cookie(request)):
        raise PersistenceError("Could not log out")
    response.delete_cookie(
        key=container.settings.session_cookie_name,
        httponly=True,
        secure=container.settings.cookie_secure,
        samesite="lax",
    )
    return {"success": True, "message": "Logged out successfully"}


@router.get("/status")
async def auth_status(request: Request) -> dict[str, object]:
    """Report whether the caller is logged in."""
    status = _container(request).auth_service.status(_session_cookie(request))
    return {"authenticated": status.authenticated, "username": status.username}
