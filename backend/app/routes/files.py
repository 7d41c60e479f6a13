"""
Inventory API: Uploaded Photo Serving
=======================================

What:  GET {UPLOAD_URL_PATH}/{filename} returns a stored product photo.
How:   The name is resolved under UPLOAD_DIR by FileService; anything that
       would leave the directory is rejected, missing files are 404.
Who:   <img> tags and clients following `foto_url`. No token required.

Stored names are never reused, so responses are cacheable for a long time.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.exceptions import NotFoundError
from app.schemas.common import ErrorResponse
from app.services.file_service import FileService, get_file_service

logger = logging.getLogger(__name__)

# Mounted by create_app() with prefix=settings.upload_url_path
router = APIRouter(tags=["Uploads"])


@router.get(
    "/{filename}",
    name="serve_upload",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid file name", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded product photo",
)
async def serve_upload(
    filename: str,
    files: FileService = Depends(get_file_service),
) -> FileResponse:
    path = files.resolve(filename)
    try:
        found = path.is_file()
    except OSError:
        # e.g. ENAMETOOLONG
        found = False
    if not found:
        raise NotFoundError(resource="File", resource_id=filename)

    return FileResponse(
        path=str(path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
