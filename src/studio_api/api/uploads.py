"""Gallery image upload endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile

from studio_api.api.auth import enforce_strict_limit, require_auth
from studio_api.domain.errors import InvalidInputError

if TYPE_CHECKING:
    from studio_api.containers import AppContainer

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post(
    "/upload", dependencies=[Depends(enforce_strict_limit), Depends(require_auth)]
)
async def upload_image(request: Request) -> dict[str, object]:
    """Accept one JPEG in the ``image`` form field and store it."""
    container: AppContainer = request.app.state.container
    service = container.upload_service
    service.check_request_size(_content_length(request))

    form = await request.form(max_files=1)
    try:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            raise InvalidInputError("No file uploaded")
        stored = await service.store(image, image.filename, image.content_type)
    finally:
        await form.close()
    return {
        "success": True,
        "message": "File uploaded successfully!",
        "filePath": stored.file_path,
        "filename": stored.filename,
    }


def _content_length(request: Request) -> int | None:
    raw = request.headers.get("content-length")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidInputError("Invalid Content-Length") from exc
