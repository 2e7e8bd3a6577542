# backend/utils/uploads.py
import logging
import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile

from config import settings

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}

# Files are served by StaticFiles mounted at /uploads
UPLOAD_DIR = Path(settings.UPLOAD_DIR)


def save_image(file: UploadFile, prefix: str) -> str:
    """Store an uploaded image and return its public path (``/uploads/...``)."""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type")

    try:
        data = file.file.read()
    finally:
        file.file.close()

    if len(data) > settings.MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=400,
            detail=f"Image is too large. Please use an image under {settings.MAX_IMAGE_BYTES // 1024}KB.",
        )

    filename = f"{prefix}_{uuid.uuid4().hex}.{ALLOWED_IMAGE_TYPES[file.content_type]}"
    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    try:
        (UPLOAD_DIR / filename).write_bytes(data)
    except OSError as e:
        logger.error("Could not save upload %s: %s", filename, e)
        raise HTTPException(status_code=500, detail=f"File save error: {e}")

    return f"/uploads/{filename}"
