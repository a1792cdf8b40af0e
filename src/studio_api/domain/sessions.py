"""Domain models for admin sessions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionRecord:
    """Represents a server-side admin session."""

    token: str
    username: str
    created_at: datetime
    authenticated: bool = True


@dataclass(frozen=True)
class AuthStatus:
    authenticated: bool
    username: str | None = None
