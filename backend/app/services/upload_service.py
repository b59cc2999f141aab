"""Illustration upload storage.

Validates declared MIME type and filename extension independently (file
bytes are not inspected), enforces the byte cap, and writes the file to the
upload directory under a collision-resistant generated name.
"""

import os
import secrets
import time
from pathlib import Path

import structlog
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.exceptions import InvalidUploadError

logger = structlog.get_logger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}

INVALID_TYPE_MESSAGE = "Only images are allowed (jpeg, jpg, png, gif)"


def validate_image_type(filename: str, content_type: str | None) -> str:
    """Check the declared content type and extension; return the lower-cased extension.

    Raises:
        InvalidUploadError: either check fails.
    """
    _, ext = os.path.splitext(filename.lower())
    mimetype = (content_type or "").split(";")[0].strip().lower()
    if ext not in ALLOWED_EXTENSIONS or mimetype not in ALLOWED_CONTENT_TYPES:
        raise InvalidUploadError(INVALID_TYPE_MESSAGE)
    return ext


def generate_filename(ext: str) -> str:
    """Millisecond timestamp plus a random token, keeping the original extension."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(8)}{ext}"


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


async def save_image(upload: UploadFile, upload_dir: str | Path, max_bytes: int) -> str:
    """Validate and persist an uploaded image.

    Args:
        upload: the multipart file
        upload_dir: directory served under /uploads (created if absent)
        max_bytes: inclusive size limit

    Returns:
        The generated filename (relative to upload_dir).

    Raises:
        InvalidUploadError: bad type/extension or file larger than max_bytes.
    """
    ext = validate_image_type(upload.filename or "", upload.content_type)

    # Read one byte past the cap so oversize files are detected without buffering them whole
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise InvalidUploadError(f"File too large (max {max_bytes} bytes)")

    filename = generate_filename(ext)
    await run_in_threadpool(_write_file, Path(upload_dir) / filename, data)
    logger.info("image_uploaded", filename=filename, size=len(data), original=upload.filename)
    return filename
