"""Gallery catalog and playlist endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from studio_api.api.auth import enforce_strict_limit, require_auth
from studio_api.api.models import (
    GalleryItemRequest,
    GalleryReplaceRequest,
    PlaylistReplaceRequest,
)
from studio_api.services.catalog import parse_position
from studio_api.services.documents import catalog_to_payload, playlist_to_payload

if TYPE_CHECKING:
    from studio_api.containers import AppContainer

router = APIRouter(prefix="/api", tags=["gallery"])

_ADMIN = [Depends(enforce_strict_limit), Depends(require_auth)]


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/gallery")
async def get_gallery(request: Request) -> dict[str, object]:
    """Return the gallery catalog."""
    return catalog_to_payload(_container(request).catalog_service.get())


@router.post("/gallery", dependencies=_ADMIN)
async def replace_gallery(
    payload: GalleryReplaceRequest, request: Request
) -> dict[str, object]:
    """Overwrite the whole gallery catalog."""
    _container(request).catalog_service.replace_all(payload.gallery_data)
    return {"success": True, "message": "Gallery updated successfully!"}


@router.post("/gallery/add", dependencies=_ADMIN)
async def add_gallery_item(
    payload: GalleryItemRequest, request: Request
) -> dict[str, object]:
    """Append an item to the catalog."""
    _container(request).catalog_service.append(payload.model_dump(exclude_none=True))
    return {"success": True, "message": "Item added successfully!"}


@router.put("/gallery/{index}", dependencies=_ADMIN)
async def update_gallery_item(
    index: str, payload: GalleryItemRequest, request: Request
) -> dict[str, object]:
    """Replace the item at a catalog position."""
    _container(request).catalog_service.replace_at(
        parse_position(index), payload.model_dump(exclude_none=True)
    )
    return {"success": True, "message": "Item updated successfully!"}


@router.delete("/gallery/{index}", dependencies=_ADMIN)
async def remove_gallery_item(index: str, request: Request) -> dict[str, object]:
    """Remove the item at a catalog position."""
    _container(request).catalog_service.remove_at(parse_position(index))
    return {"success": True, "message": "Item removed successfully!"}


@router.get("/playlist")
async def get_playlist(request: Request) -> dict[str, object]:
    """Return the background image playlist."""
    return playlist_to_payload(_container(request).playlist_service.get())


@router.post("/playlist", dependencies=_ADMIN)
async def replace_playlist(
    payload: PlaylistReplaceRequest, request: Request
) -> dict[str, object]:
    """Overwrite the playlist."""
    _container(request).playlist_service.replace_all(payload.playlist)
    return {"success": True, "message": "Playlist updated successfully!"}
