"""JSON file-backed document store."""

import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from studio_api.domain.documents import (
    DEFAULT_CATALOG,
    DEFAULT_PLAYLIST,
    CatalogDocument,
    Document,
    DocumentKind,
)
from studio_api.domain.errors import InvalidInputError
from studio_api.services.documents import (
    DocumentStore,
    catalog_from_stored,
    catalog_to_payload,
    playlist_from_stored,
    playlist_to_payload,
)

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileDocumentStore(DocumentStore):
    """Stores each document as a formatted JSON file on local disk.

    Reads repair bad fields item by item. A file that still cannot be read is
    served as the default document, and the first save after that copies it
    aside as ``<name>.unreadable-<time>`` before writing, so nothing already on
    disk is lost.
    """

    catalog_path: Path
    playlist_path: Path

    def load(self, kind: DocumentKind) -> Document:
        """Read a document, falling back to the built-in default."""
        path = self._path_for(kind)
        default = DEFAULT_CATALOG if kind is DocumentKind.CATALOG else DEFAULT_PLAYLIST
        if not path.exists():
            _logger.info("No %s file at %s, using default", kind.value, path)
            return default
        try:
            return self._read(kind, path)
        except (OSError, ValueError, InvalidInputError) as exc:
            _logger.warning("Error loading %s data, using default: %s", kind.value, exc)
            return default

    def save(self, kind: DocumentKind, document: Document) -> bool:
        """Write a document atomically via a temporary file and rename."""
        path = self._path_for(kind)
        if isinstance(document, CatalogDocument):
            payload = catalog_to_payload(document)
        else:
            payload = playlist_to_payload(document)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            self._backup_if_unreadable(kind, path)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=path.parent,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                json.dump(payload, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as exc:
            _logger.error("Error saving %s data: %s", kind.value, exc)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False
        return True

    def _read(self, kind: DocumentKind, path: Path) -> Document:
        payload = json.loads(path.read_text(encoding="utf-8"))
        modified_at = datetime.fromtimestamp(path.stat().st_mtime, tz=UTC)
        if kind is DocumentKind.CATALOG:
            return catalog_from_stored(payload, modified_at)
        return playlist_from_stored(payload, modified_at)

    def _backup_if_unreadable(self, kind: DocumentKind, path: Path) -> None:
        if not path.exists():
            return
        try:
            self._read(kind, path)
        except (ValueError, InvalidInputError):
            stamp = datetime.now(tz=UTC).strftime("%Y%m%dT%H%M%S%f")
            backup = path.with_name(f"{path.name}.unreadable-{stamp}")
            shutil.copy2(path, backup)
            _logger.warning("Copied unreadable %s file to %s", kind.value, backup)

    def _path_for(self, kind: DocumentKind) -> Path:
        if kind is DocumentKind.CATALOG:
            return self.catalog_path
        return self.playlist_path
