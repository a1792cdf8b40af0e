"""Pydantic models for admin request bodies."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Admin login payload."""

    username: str | None = None
    password: str | None = None


class GalleryItemRequest(BaseModel):
    """Fields accepted when adding or updating one gallery item."""

    path: str | None = None
    images: list[str] | None = None
    price: str | None = None
    status: str | None = None


class GalleryReplaceRequest(BaseModel):
    """Full catalog replacement payload."""

    model_config = ConfigDict(populate_by_name=True)

    gallery_data: list[dict[str, Any]] | None = Field(
        default=None, alias="galleryData"
    )


class PlaylistReplaceRequest(BaseModel):
    playlist: list[str] | None = None
