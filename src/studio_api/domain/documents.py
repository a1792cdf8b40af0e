"""Domain models for the gallery catalog and background playlist."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

DEFAULT_PRICE = "$299"
MAX_PATH_LENGTH = 500
MAX_PLAYLIST_LENGTH = 100


class DocumentKind(Enum):
    """The two documents kept on disk."""

    CATALOG = "catalog"
    PLAYLIST = "playlist"


class ItemStatus(str, Enum):
    AVAILABLE = "available"
    SOLD = "sold"


@dataclass(frozen=True)
class GalleryItem:
    """A single catalog entry, identified by its position."""

    path: str
    status: ItemStatus
    price: str = DEFAULT_PRICE
    images: tuple[str, ...] | None = None
    extra: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CatalogDocument:
    """The gallery catalog with its last modification time."""

    items: tuple[GalleryItem, ...]
    last_updated: datetime


@dataclass(frozen=True)
class PlaylistDocument:
    """Ordered background images with their last modification time."""

    entries: tuple[str, ...]
    last_updated: datetime


Document = CatalogDocument | PlaylistDocument

_DEFAULTS_CREATED_AT = datetime.now(tz=UTC)

DEFAULT_CATALOG = CatalogDocument(
    items=(
        GalleryItem("assets/gallery/bg-img2.JPG", ItemStatus.AVAILABLE),
        GalleryItem("assets/gallery/bg-img4.JPG", ItemStatus.SOLD),
        GalleryItem("assets/gallery/bg-img5.JPG", ItemStatus.AVAILABLE),
        GalleryItem("assets/gallery/bg-img10.JPG", ItemStatus.AVAILABLE),
        GalleryItem("assets/gallery/bg-img11.JPG", ItemStatus.SOLD),
        GalleryItem("assets/gallery/bg-img13.jpg", ItemStatus.AVAILABLE),
        GalleryItem("assets/gallery/bg-img.JPG", ItemStatus.AVAILABLE),
    ),
    last_updated=_DEFAULTS_CREATED_AT,
)

DEFAULT_PLAYLIST = PlaylistDocument(
    entries=(
        "assets/gallery/bg-img.JPG",
        *(f"assets/gallery/bg-img{n}.JPG" for n in range(1, 13)),
        "assets/gallery/bg-img13.jpg",
        "assets/gallery/bg-img14.JPG",
    ),
    last_updated=_DEFAULTS_CREATED_AT,
)
