"""
Image upload proxy to the media host.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from blogfolio.config import Settings, get_settings
from blogfolio.dependencies import get_media_client, require_admin
from blogfolio.errors import BadRequestError, MediaHostError, UploadError
from blogfolio.media import MediaClient
from blogfolio.records import UserRecord
from blogfolio.schemas import MessageResponse, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/image", response_model=UploadResponse)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    _: UserRecord = Depends(require_admin),
    media: MediaClient = Depends(get_media_client),
    settings: Settings = Depends(get_settings),
):
    """
    Validate a single image (type and size) and forward it to the media host.
    """
    if image is None:
        raise UploadError("No image file provided")
    content_type = image.content_type or ""
    if not content_type.startswith("image/"):
        raise UploadError("Only image files are allowed")

    # Read one byte past the limit so oversize files are caught without
    # buffering all of them.
    data = await image.read(settings.max_upload_bytes + 1)
    if len(data) > settings.max_upload_bytes:
        raise UploadError("File too large")

    try:
        uploaded = await run_in_threadpool(media.upload_image, data, content_type)
    except Exception as exc:
        logger.exception("Upload to media host failed")
        raise MediaHostError("Upload failed") from exc

    return UploadResponse(
        url=uploaded.url,
        public_id=uploaded.public_id,
        width=uploaded.width,
        height=uploaded.height,
    )


@router.delete("/image/{public_id:path}", response_model=MessageResponse)
async def delete_image(
    public_id: str,
    _: UserRecord = Depends(require_admin),
    media: MediaClient = Depends(get_media_client),
):
    try:
        deleted = await run_in_threadpool(media.delete_image, public_id)
    except Exception as exc:
        logger.exception("Delete on media host failed for %s", public_id)
        raise MediaHostError("Delete failed") from exc
    if not deleted:
        raise BadRequestError("Failed to delete image")
    return MessageResponse(message="Image deleted successfully")
