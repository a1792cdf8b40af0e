"""Gallery image ingestion."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Protocol

from studio_api.domain.errors import (
    InvalidInputError,
    LengthRequiredError,
    PersistenceError,
)
from studio_api.services.documents import utcnow

_ALLOWED_CONTENT_TYPES = {"image/jpeg"}
_ALLOWED_EXTENSIONS = {".jpg", ".jpeg"}
_CHUNK_SIZE = 64 * 1024
# Room for multipart boundaries and part headers around the file body.
_MULTIPART_OVERHEAD_BYTES = 16 * 1024
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

_logger = logging.getLogger(__name__)


class UploadStream(Protocol):
    """Readable upload body, e.g. a Starlette ``UploadFile``."""

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes."""


@dataclass(frozen=True)
class StoredImage:
    filename: str
    file_path: str
    size_bytes: int


@dataclass
class UploadService:
    """Streams accepted JPEG uploads into the gallery asset directory."""

    assets_dir: Path
    url_prefix: str
    max_bytes: int = 10 * 1024 * 1024
    clock: Callable[[], datetime] = utcnow

    def check_type(self, filename: str | None, content_type: str | None) -> None:
        """Reject anything that is neither a JPEG MIME type nor a .jpg name."""
        extension = Path(filename or "").suffix.lower()
        if content_type in _ALLOWED_CONTENT_TYPES or extension in _ALLOWED_EXTENSIONS:
            return
        _logger.info(
            "Rejected upload filename=%s content_type=%s", filename, content_type
        )
        raise InvalidInputError("Only JPG files are allowed!")

    def check_request_size(self, content_length: int | None) -> None:
        """Reject a request without a declared size or one over the limit."""
        if content_length is None:
            raise LengthRequiredError("Content-Length required")
        if content_length > self.max_bytes + _MULTIPART_OVERHEAD_BYTES:
            raise InvalidInputError("File too large")

    async def store(
        self, stream: UploadStream, filename: str | None, content_type: str | None
    ) -> StoredImage:
        """Validate and persist one image, returning its web path."""
        self.check_type(filename, content_type)
        self.assets_dir.mkdir(parents=True, exist_ok=True)
        millis = (self.clock() - _EPOCH) // timedelta(milliseconds=1)
        final_name = f"uploaded-{millis}.jpg"
        target = self.assets_dir / final_name
        partial = self.assets_dir / f".{final_name}.part"
        written = 0
        try:
            with partial.open("wb") as handle:
                while chunk := await stream.read(_CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise InvalidInputError("File too large")
                    handle.write(chunk)
            if partial.stat().st_size > self.max_bytes:
                raise InvalidInputError("File too large")
            partial.replace(target)
        except InvalidInputError:
            _logger.info("Rejected upload over %s bytes", self.max_bytes)
            partial.unlink(missing_ok=True)
            raise
        except OSError as exc:
            _logger.exception("Failed to write upload %s", final_name)
            partial.unlink(missing_ok=True)
            raise PersistenceError("Upload failed") from exc
        _logger.info("Stored upload %s (%s bytes)", final_name, written)
        return StoredImage(
            filename=final_name,
            file_path=f"{self.url_prefix.rstrip('/')}/{final_name}",
            size_bytes=written,
        )
