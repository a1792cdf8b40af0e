"""Document store interface and JSON payload conversion."""

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Protocol

from studio_api.domain.documents import (
    DEFAULT_PRICE,
    MAX_PATH_LENGTH,
    CatalogDocument,
    Document,
    DocumentKind,
    GalleryItem,
    ItemStatus,
    PlaylistDocument,
)
from studio_api.domain.errors import InvalidInputError

_CORE_ITEM_KEYS = {"path", "images", "price", "status"}
_STATUS_VALUES = {status.value for status in ItemStatus}

_logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    """Persistence interface for the catalog and playlist documents."""

    def load(self, kind: DocumentKind) -> Document:
        """Return the stored document, or the built-in default."""

    def save(self, kind: DocumentKind, document: Document) -> bool:
        """Persist a document, returning False on failure."""


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO 8601 UTC string with millisecond precision."""
    return (
        value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


def parse_timestamp(raw: object) -> datetime:
    if not isinstance(raw, str):
        raise InvalidInputError("Invalid lastUpdated")
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidInputError("Invalid lastUpdated") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def validate_path(path: object) -> str:
    """Return the path if it is a usable asset path."""
    if not isinstance(path, str) or len(path) > MAX_PATH_LENGTH:
        raise InvalidInputError("Invalid path")
    return path


def parse_status(raw: object) -> ItemStatus:
    try:
        return ItemStatus(raw)
    except ValueError as exc:
        raise InvalidInputError("Invalid status") from exc


def parse_price(raw: object) -> str:
    if raw is None or raw == "":
        return DEFAULT_PRICE
    if not isinstance(raw, str):
        raise InvalidInputError("Invalid price")
    return raw


def parse_images(raw: object) -> tuple[str, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(i, str) for i in raw):
        raise InvalidInputError("Invalid images")
    return tuple(raw)


def item_from_payload(payload: object) -> GalleryItem:
    """Build a gallery item from a JSON object, keeping unknown keys."""
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Invalid gallery item")
    if not payload.get("path") or not payload.get("status"):
        raise InvalidInputError("Path and status are required")
    return GalleryItem(
        path=validate_path(payload["path"]),
        status=parse_status(payload["status"]),
        price=parse_price(payload.get("price")),
        images=parse_images(payload.get("images")),
        extra={k: v for k, v in payload.items() if k not in _CORE_ITEM_KEYS},
    )


def item_to_payload(item: GalleryItem) -> dict[str, object]:
    payload: dict[str, object] = dict(item.extra)
    payload["path"] = item.path
    if item.images is not None:
        payload["images"] = list(item.images)
    payload["price"] = item.price
    payload["status"] = item.status.value
    return payload


def catalog_from_stored(payload: object, fallback_time: datetime) -> CatalogDocument:
    """Read a catalog file leniently, repairing fields instead of dropping items.

    Only a payload without a ``galleryData`` list, or an item that is not an
    object with a string ``path``, makes the document unreadable.
    """
    if not isinstance(payload, Mapping) or not isinstance(
        payload.get("galleryData"), list
    ):
        raise InvalidInputError("Invalid gallery data")
    return CatalogDocument(
        items=tuple(_stored_item(item) for item in payload["galleryData"]),
        last_updated=_stored_timestamp(payload.get("lastUpdated"), fallback_time),
    )


def catalog_to_payload(document: CatalogDocument) -> dict[str, object]:
    return {
        "galleryData": [item_to_payload(item) for item in document.items],
        "lastUpdated": format_timestamp(document.last_updated),
    }


def playlist_entries_from_payload(entries: object) -> tuple[str, ...]:
    if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
        raise InvalidInputError("Invalid playlist data")
    return tuple(entries)


def playlist_from_stored(
    payload: object, fallback_time: datetime
) -> PlaylistDocument:
    """Read a playlist file, skipping entries that are not strings."""
    if not isinstance(payload, Mapping) or not isinstance(
        payload.get("playlist"), list
    ):
        raise InvalidInputError("Invalid playlist data")
    entries = payload["playlist"]
    kept = tuple(entry for entry in entries if isinstance(entry, str))
    if len(kept) != len(entries):
        _logger.warning(
            "Skipped %s non-string playlist entries", len(entries) - len(kept)
        )
    return PlaylistDocument(
        entries=kept,
        last_updated=_stored_timestamp(payload.get("lastUpdated"), fallback_time),
    )


def playlist_to_payload(document: PlaylistDocument) -> dict[str, object]:
    return {
        "playlist": list(document.entries),
        "lastUpdated": format_timestamp(document.last_updated),
    }


def _stored_item(payload: object) -> GalleryItem:
    if not isinstance(payload, Mapping):
        raise InvalidInputError("Invalid gallery item")
    path = payload.get("path")
    if not isinstance(path, str) or not path:
        raise InvalidInputError("Invalid path")
    return GalleryItem(
        path=path,
        status=_stored_status(path, payload.get("status")),
        price=_stored_price(path, payload.get("price")),
        images=_stored_images(path, payload.get("images")),
        extra={k: v for k, v in payload.items() if k not in _CORE_ITEM_KEYS},
    )


def _stored_status(path: str, raw: object) -> ItemStatus:
    normalized = raw.strip().lower() if isinstance(raw, str) else None
    if normalized in _STATUS_VALUES:
        return ItemStatus(normalized)
    _logger.warning("Item %s has status %r, reading it as available", path, raw)
    return ItemStatus.AVAILABLE


def _stored_price(path: str, raw: object) -> str:
    if raw is None or raw == "":
        return DEFAULT_PRICE
    if isinstance(raw, str):
        return raw
    if isinstance(raw, int | float) and not isinstance(raw, bool):
        return str(raw)
    _logger.warning("Item %s has price %r, using the default", path, raw)
    return DEFAULT_PRICE


def _stored_images(path: str, raw: object) -> tuple[str, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        _logger.warning("Item %s has images %r, dropping them", path, raw)
        return None
    return tuple(image for image in raw if isinstance(image, str))


def _stored_timestamp(raw: object, fallback_time: datetime) -> datetime:
    try:
        return parse_timestamp(raw)
    except InvalidInputError:
        return fallback_time
