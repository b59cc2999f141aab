"""Illustration upload route.

POST /upload with multipart field "image". Stores the file in the upload
directory and returns the public URL under /uploads.
"""

import structlog
from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.core.config import get_settings
from app.core.exceptions import InvalidUploadError
from app.schemas.uploads import UploadResponse
from app.services.upload_service import save_image

logger = structlog.get_logger(__name__)

router = APIRouter()

UPLOADS_URL_PREFIX = "/uploads"


@router.post("/upload", response_model=UploadResponse)
async def upload_image(request: Request, image: UploadFile | str | None = File(None)):
    """Upload one illustration (jpeg/jpg/png/gif, max 5 MiB by default).

    A plain text value in the "image" field counts as no file.
    """
    # Form parsing yields starlette's UploadFile, which fastapi's subclasses
    if not isinstance(image, StarletteUploadFile) or not image.filename:
        raise HTTPException(status_code=400, detail="No image was sent")

    settings = get_settings()
    try:
        filename = await save_image(image, settings.upload_dir, settings.max_upload_bytes)
    except InvalidUploadError as e:
        logger.info("upload_rejected", original=image.filename, content_type=image.content_type, reason=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    finally:
        await image.close()

    base_url = str(request.base_url).rstrip("/")
    return UploadResponse(url=f"{base_url}{UPLOADS_URL_PREFIX}/{filename}")
