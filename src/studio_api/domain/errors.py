"""Application errors surfaced to API callers."""


class StudioError(Exception):
    """Base class for errors carrying a caller-safe message."""

    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(StudioError):
    """Malformed, missing or out-of-range input."""

    default_message = "Invalid request"


class LengthRequiredError(InvalidInputError):
    default_message = "Content-Length required"


class InvalidCredentialsError(StudioError):
    default_message = "Invalid credentials"


class AuthenticationRequiredError(StudioError):
    default_message = "Authentication required"


class RateLimitExceededError(StudioError):
    default_message = "Too many requests from this IP, please try again later."


class PersistenceError(StudioError):
    """A document could not be written to disk."""

    default_message = "Failed to save data"


class ConversionFailedError(StudioError):
    default_message = "Currency conversion failed"
