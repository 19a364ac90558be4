"""On-disk storage for images uploaded from image elements.

Files live under ``$RESUME_CANVAS_UPLOAD_DIR/images`` (default
``<project_root>/.resume_canvas_uploads/images``) and are named
``<public_id><extension>``. The image type is detected from the leading
bytes; the client-supplied content type must agree with it.
"""

from __future__ import annotations

import os
import re
import uuid
from dataclasses import dataclass
from pathlib import Path

from resume_canvas.config import get_project_root

__all__ = [
    "MAX_IMAGE_BYTES",
    "StoredImage",
    "delete_image",
    "get_image_path",
    "get_image_storage_root",
    "get_media_type",
    "store_image",
]

MAX_IMAGE_BYTES = 5 * 1024 * 1024
IMAGE_DIR_NAME = "images"

IMAGE_TYPE_TO_MIME = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "bmp": "image/bmp",
}
IMAGE_TYPE_TO_EXTENSION = {
    "png": ".png",
    "jpeg": ".jpg",
    "gif": ".gif",
    "webp": ".webp",
    "bmp": ".bmp",
}
EXTENSION_TO_MIME = {ext: IMAGE_TYPE_TO_MIME[kind] for kind, ext in IMAGE_TYPE_TO_EXTENSION.items()}
CONTENT_TYPE_ALIASES = {
    "image/jpg": "image/jpeg",
    "image/pjpeg": "image/jpeg",
}
# Generic types some clients send when they do not know better.
_UNTYPED_CONTENT = {"application/octet-stream", ""}

_PUBLIC_ID_PATTERN = re.compile(r"^[a-f0-9]{32}$")


@dataclass(frozen=True)
class StoredImage:
    public_id: str
    path: Path
    mime_type: str


def get_image_storage_root() -> Path:
    """Return the directory holding uploaded images."""
    env_root = os.getenv("RESUME_CANVAS_UPLOAD_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve() / IMAGE_DIR_NAME
    return get_project_root() / ".resume_canvas_uploads" / IMAGE_DIR_NAME


def store_image(*, content_type: str | None, data: bytes) -> StoredImage:
    """Validate and persist an uploaded image under a fresh public id.

    Raises:
        ValueError: If the upload is empty, too large, or not a supported
            image.
    """
    image_type = _validate_image_upload(content_type=content_type, data=data)
    public_id = uuid.uuid4().hex
    root = get_image_storage_root()
    root.mkdir(parents=True, exist_ok=True)
    target = root / f"{public_id}{IMAGE_TYPE_TO_EXTENSION[image_type]}"
    target.write_bytes(data)
    return StoredImage(public_id=public_id, path=target, mime_type=IMAGE_TYPE_TO_MIME[image_type])


def get_image_path(public_id: str) -> Path | None:
    """Return the stored file for *public_id*, if any."""
    if not _PUBLIC_ID_PATTERN.match(public_id):
        return None
    root = get_image_storage_root()
    if not root.exists():
        return None
    for ext in EXTENSION_TO_MIME:
        candidate = root / f"{public_id}{ext}"
        if candidate.exists():
            return candidate
    return None


def get_media_type(path: Path) -> str | None:
    return EXTENSION_TO_MIME.get(path.suffix.lower())


def delete_image(public_id: str) -> bool:
    """Remove the stored image. Returns False if nothing was stored."""
    path = get_image_path(public_id)
    if path is None:
        return False
    path.unlink(missing_ok=True)
    return True


def _normalize_content_type(content_type: str | None) -> str | None:
    if content_type is None:
        return None
    normalized = content_type.split(";", 1)[0].strip().lower()
    return CONTENT_TYPE_ALIASES.get(normalized, normalized)


def _detect_image_type(data: bytes) -> str | None:
    if data.startswith(b"\x89PNG\r\n\x1a\n"):
        return "png"
    if data[:3] == b"\xff\xd8\xff":
        return "jpeg"
    if data[:6] in (b"GIF87a", b"GIF89a"):
        return "gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    if data[:2] == b"BM":
        return "bmp"
    return None


def _validate_image_upload(*, content_type: str | None, data: bytes) -> str:
    if not data:
        raise ValueError("Image file is empty.")
    if len(data) > MAX_IMAGE_BYTES:
        raise ValueError("Image exceeds 5 MiB.")

    image_type = _detect_image_type(data)
    if image_type is None:
        raise ValueError("Unsupported image type.")

    normalized = _normalize_content_type(content_type)
    if normalized is None or normalized in _UNTYPED_CONTENT:
        return image_type
    if normalized not in IMAGE_TYPE_TO_MIME.values():
        raise ValueError("Unsupported image content type.")
    if normalized != IMAGE_TYPE_TO_MIME[image_type]:
        raise ValueError("Image content type does not match image data.")
    return image_type
