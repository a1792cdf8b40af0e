"""Admin authentication with server-side sessions."""

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

import bcrypt
from itsdangerous import BadSignature, URLSafeTimedSerializer

from studio_api.domain.errors import (
    AuthenticationRequiredError,
    InvalidCredentialsError,
    InvalidInputError,
)
from studio_api.domain.sessions import AuthStatus, SessionRecord
from studio_api.services.cache import Cache
from studio_api.services.documents import utcnow

_logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Verifies the single admin credential and tracks sessions.

    Session records live in ``sessions`` under a random token and expire
    ``session_ttl_seconds`` after login; they are never refreshed. The cookie
    carries the token signed with ``secret`` so forged values are rejected
    before any lookup.
    """

    username: str
    password_hash: bytes
    secret: str
    sessions: Cache
    session_ttl_seconds: int = 24 * 60 * 60
    clock: Callable[[], datetime] = utcnow
    _serializer: URLSafeTimedSerializer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._serializer = URLSafeTimedSerializer(self.secret, salt="studio-session")

    def login(self, username: str | None, password: str | None) -> str:
        """Create a session and return the signed cookie value."""
        if not username or not password:
            raise InvalidInputError("Username and password are required")
        username_ok = secrets.compare_digest(
            username.encode("utf-8"), self.username.encode("utf-8")
        )
        password_ok = self._check_password(password)
        if not (username_ok and password_ok):
            _logger.info("Invalid credentials for username=%s", username)
            raise InvalidCredentialsError("Invalid credentials")
        token = secrets.token_urlsafe(32)
        record = SessionRecord(token=token, username=username, created_at=self.clock())
        self.sessions.set(_key(token), record, ttl_seconds=self.session_ttl_seconds)
        _logger.info("Login successful for username=%s", username)
        return self._serializer.dumps(token)

    def logout(self, cookie: str | None) -> bool:
        """Destroy the session behind a cookie, if any."""
        token = self._token_from_cookie(cookie)
        if token is None:
            return True
        try:
            self.sessions.delete(_key(token))
        except Exception:
            _logger.exception("Failed to destroy session")
            return False
        return True

    def status(self, cookie: str | None) -> AuthStatus:
        """Report whether the cookie belongs to a live session."""
        session = self.current_session(cookie)
        if session is None:
            return AuthStatus(authenticated=False)
        return AuthStatus(authenticated=True, username=session.username)

    def current_session(self, cookie: str | None) -> SessionRecord | None:
        token = self._token_from_cookie(cookie)
        if token is None:
            return None
        record = self.sessions.get(_key(token))
        if isinstance(record, SessionRecord) and record.authenticated:
            return record
        return None

    def require_session(self, cookie: str | None) -> SessionRecord:
        """Return the live session or raise an authentication error."""
        session = self.current_session(cookie)
        if session is None:
            raise AuthenticationRequiredError("Authentication required")
        return session

    def _check_password(self, password: str) -> bool:
        try:
            return bcrypt.checkpw(password.encode("utf-8"), self.password_hash)
        except ValueError as exc:
            _logger.warning("Password verification failed: %s", exc)
            return False

    def _token_from_cookie(self, cookie: str | None) -> str | None:
        if not cookie:
            return None
        try:
            token = self._serializer.loads(cookie, max_age=self.session_ttl_seconds)
        except BadSignature:
            return None
        return token if isinstance(token, str) else None


def _key(token: str) -> str:
    return f"session:{token}"
