"""Background playlist editing."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from studio_api.domain.documents import (
    MAX_PLAYLIST_LENGTH,
    DocumentKind,
    PlaylistDocument,
)
from studio_api.domain.errors import InvalidInputError, PersistenceError
from studio_api.services.documents import (
    DocumentStore,
    playlist_entries_from_payload,
    utcnow,
)

_logger = logging.getLogger(__name__)


@dataclass
class PlaylistService:
    """Service for the background image playlist."""

    store: DocumentStore
    clock: Callable[[], datetime] = utcnow
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get(self) -> PlaylistDocument:
        """Return the current playlist, or the default one."""
        return self.store.load(DocumentKind.PLAYLIST)  # type: ignore[return-value]

    def replace_all(self, playlist: object) -> PlaylistDocument:
        """Overwrite the playlist with a new ordered list of paths."""
        entries = playlist_entries_from_payload(playlist)
        if len(entries) > MAX_PLAYLIST_LENGTH:
            raise InvalidInputError("Playlist too long")
        document = PlaylistDocument(entries=entries, last_updated=self.clock())
        with self._lock:
            if not self.store.save(DocumentKind.PLAYLIST, document):
                raise PersistenceError("Failed to save playlist data")
        _logger.info("Playlist saved with %s entries", len(entries))
        return document
