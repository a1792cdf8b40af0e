"""Gallery catalog editing."""

import logging
import re
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime

from studio_api.domain.documents import CatalogDocument, DocumentKind, GalleryItem
from studio_api.domain.errors import InvalidInputError, PersistenceError
from studio_api.services.documents import (
    DocumentStore,
    item_from_payload,
    parse_images,
    parse_price,
    parse_status,
    utcnow,
    validate_path,
)

_POSITION_PATTERN = re.compile(r"[0-9]+")

_logger = logging.getLogger(__name__)


def parse_position(raw: object) -> int:
    """Parse a catalog position from a path segment or integer."""
    if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
        return raw
    if isinstance(raw, str) and _POSITION_PATTERN.fullmatch(raw):
        return int(raw)
    raise InvalidInputError("Invalid index")


@dataclass
class CatalogService:
    """Read and positional edits over the catalog document.

    Every mutation runs load, mutate and save under one lock and saves a new
    document, so a failed save leaves the stored catalog untouched.
    """

    store: DocumentStore
    clock: Callable[[], datetime] = utcnow
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self) -> CatalogDocument:
        """Return the current catalog, or the default one."""
        return self.store.load(DocumentKind.CATALOG)  # type: ignore[return-value]

    def replace_all(self, gallery_data: object) -> CatalogDocument:
        """Overwrite the whole catalog."""
        if not isinstance(gallery_data, list):
            raise InvalidInputError("Invalid gallery data")
        items = tuple(item_from_payload(entry) for entry in gallery_data)
        with self._lock:
            return self._save(items)

    def append(self, payload: Mapping[str, object]) -> CatalogDocument:
        """Add an item at the end of the catalog."""
        item = GalleryItem(
            path=_required_path(payload),
            status=parse_status(payload["status"]),
            price=parse_price(payload.get("price")),
        )
        with self._lock:
            current = self.get()
            return self._save((*current.items, item))

    def replace_at(
        self, position: int, payload: Mapping[str, object]
    ) -> CatalogDocument:
        """Replace the item at a position, keeping its extra fields."""
        index = parse_position(position)
        path = _required_path(payload)
        status = parse_status(payload["status"])
        price = parse_price(payload.get("price"))
        images = parse_images(payload.get("images"))
        if images is None:
            images = (path,)
        with self._lock:
            current = self.get()
            _check_in_range(index, current)
            existing = current.items[index]
            updated = replace(
                existing, path=path, images=images, price=price, status=status
            )
            items = list(current.items)
            items[index] = updated
            return self._save(tuple(items))

    def remove_at(self, position: int) -> CatalogDocument:
        """Remove one item; later items shift down by one."""
        index = parse_position(position)
        with self._lock:
            current = self.get()
            _check_in_range(index, current)
            items = current.items[:index] + current.items[index + 1 :]
            return self._save(items)

    def _save(self, items: tuple[GalleryItem, ...]) -> CatalogDocument:
        document = CatalogDocument(items=items, last_updated=self.clock())
        if not self.store.save(DocumentKind.CATALOG, document):
            raise PersistenceError("Failed to save data")
        _logger.info("Catalog saved with %s items", len(items))
        return document


def _required_path(payload: Mapping[str, object]) -> str:
    if not payload.get("path") or not payload.get("status"):
        raise InvalidInputError("Path and status are required")
    return validate_path(payload["path"])


def _check_in_range(index: int, document: CatalogDocument) -> None:
    if index >= len(document.items):
        raise InvalidInputError("Index out of range")
