"""Image upload routes used by image elements on the canvas."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile, status
from fastapi.responses import FileResponse

from resume_canvas.api.dependencies import get_current_username
from resume_canvas.api.schemas.uploads import ImageUploadResponse
from resume_canvas.services.image_storage import (
    MAX_IMAGE_BYTES,
    delete_image,
    get_image_path,
    get_media_type,
    store_image,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post(
    "/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image",
    description="Store an image (PNG, JPEG, GIF, WEBP or BMP, at most 5 MiB).",
    responses={400: {"description": "Invalid image upload"}},
)
async def upload_image(
    request: Request,
    file: Annotated[UploadFile, File(description="Image file")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> ImageUploadResponse:
    # One byte past the limit is enough to reject an oversized file.
    data = await file.read(MAX_IMAGE_BYTES + 1)
    try:
        stored = store_image(content_type=file.content_type, data=data)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info(
        "Stored image %s (%d bytes) for %s", stored.public_id, len(data), current_username
    )
    url = str(request.url_for("get_image", public_id=stored.public_id))
    return ImageUploadResponse(url=url, public_id=stored.public_id)


@router.get(
    "/images/{public_id}",
    name="get_image",
    summary="Get an uploaded image",
    responses={
        200: {"description": "Image data"},
        404: {"description": "Image not found"},
    },
)
def get_image(public_id: str) -> Response:
    path = get_image_path(public_id)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found.")
    media_type = get_media_type(path) or "application/octet-stream"
    return FileResponse(path, media_type=media_type)


@router.delete(
    "/images/{public_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an uploaded image",
    responses={404: {"description": "Image not found"}},
)
def delete_image_endpoint(
    public_id: str,
    current_username: Annotated[str, Depends(get_current_username)],
) -> Response:
    if not delete_image(public_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found.")
    logger.info("Deleted image %s for %s", public_id, current_username)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
