"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from studio_api.config import Settings


def main() -> None:
    """Run the API on the configured host and port."""
    settings = Settings()
    uvicorn.run(
        "studio_api.api.asgi:app",
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
