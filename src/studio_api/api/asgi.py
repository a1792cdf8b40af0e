"""ASGI entrypoint for the studio API."""

from studio_api.api.app import create_app
from studio_api.containers import build_container

app = create_app(build_container())
