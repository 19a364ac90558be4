"""Tests for on-disk image storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from resume_canvas.services.image_storage import (
    delete_image,
    get_image_path,
    get_image_storage_root,
    get_media_type,
    store_image,
)

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
WEBP_BYTES = b"RIFF\x00\x00\x00\x00WEBPVP8 "


@pytest.fixture(autouse=True)
def upload_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    monkeypatch.setenv("RESUME_CANVAS_UPLOAD_DIR", str(tmp_path))
    return tmp_path


def test_storage_root_follows_environment(upload_dir: Path):
    assert get_image_storage_root() == upload_dir.resolve() / "images"


def test_store_uses_detected_extension():
    stored = store_image(content_type="image/jpg", data=JPEG_BYTES)

    assert stored.path.suffix == ".jpg"
    assert stored.mime_type == "image/jpeg"
    assert stored.path.read_bytes() == JPEG_BYTES
    assert get_image_path(stored.public_id) == stored.path
    assert get_media_type(stored.path) == "image/jpeg"


def test_content_type_parameters_are_ignored():
    stored = store_image(content_type="image/webp; charset=binary", data=WEBP_BYTES)
    assert stored.mime_type == "image/webp"


def test_missing_content_type_is_accepted():
    assert store_image(content_type=None, data=JPEG_BYTES).mime_type == "image/jpeg"


def test_malformed_public_id_is_never_resolved():
    assert get_image_path("../../etc/passwd") is None
    assert get_image_path("ABC") is None


def test_delete_image():
    stored = store_image(content_type="image/jpeg", data=JPEG_BYTES)

    assert delete_image(stored.public_id) is True
    assert not stored.path.exists()
    assert delete_image(stored.public_id) is False
