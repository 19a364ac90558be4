"""Serialization of canvas projects for dirty tracking and transmission.

The save payload mirrors the persistence API body::

    {"name": ..., "description": ..., "data": {"version": 1, "elements": [...]},
     "thumbnail": {"url": ..., "public_id": ...}}

Oversized payloads are reduced rather than rejected: element content is
truncated and styles are cut down to a small allow-list.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from resume_canvas.constants.canvas_constants import (
    CONTENT_TRUNCATION_CHARS,
    DEFAULT_ELEMENT_STYLES,
    DEFAULT_SECTION_CONTENT,
    DEGRADED_STYLE_KEYS,
    FIRST_Z_INDEX,
    ElementType,
)
from resume_canvas.editor.elements import CanvasElement, Position

if TYPE_CHECKING:
    from resume_canvas.editor.element_store import ElementStore
    from resume_canvas.services.thumbnail_capture import Thumbnail

logger = logging.getLogger(__name__)

__all__ = [
    "DATA_VERSION",
    "ElementPayload",
    "build_payload",
    "default_elements",
    "degrade_payload",
    "elements_from_data",
    "fit_payload",
    "payload_size",
    "snapshot_of",
]

DATA_VERSION = 1


class PositionPayload(BaseModel):
    x: float
    y: float


class ElementPayload(BaseModel):
    """Wire shape of one persisted element."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    type: ElementType
    content: str | None = None
    style: dict[str, Any] = Field(default_factory=dict)
    position: PositionPayload
    z_index: int = Field(validation_alias=AliasChoices("z_index", "zIndex"))

    def to_element(self) -> CanvasElement:
        return CanvasElement(
            id=self.id,
            type=self.type,
            position=Position(self.position.x, self.position.y),
            z_index=self.z_index,
            content=self.content,
            style=dict(self.style),
        )


def snapshot_of(store: ElementStore) -> str:
    """Canonical JSON of the persisted state; selection is excluded."""
    return json.dumps(
        {
            "name": store.name,
            "description": store.description,
            "elements": [element.to_dict() for element in store.elements],
        },
        sort_keys=True,
        ensure_ascii=False,
    )


def build_payload(store: ElementStore, thumbnail: Thumbnail | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": store.name,
        "description": store.description,
        "data": {
            "version": DATA_VERSION,
            "elements": [element.to_dict() for element in store.elements],
        },
    }
    if thumbnail is not None:
        payload["thumbnail"] = {"url": thumbnail.url, "public_id": thumbnail.public_id}
    return payload


def payload_size(payload: dict[str, Any]) -> int:
    """UTF-8 byte length of the JSON body."""
    return len(json.dumps(payload, ensure_ascii=False).encode("utf-8"))


def degrade_payload(
    payload: dict[str, Any],
    *,
    content_chars: int = CONTENT_TRUNCATION_CHARS,
    style_keys: tuple[str, ...] = DEGRADED_STYLE_KEYS,
) -> dict[str, Any]:
    """Return a copy with truncated content and allow-listed styles."""
    data = payload.get("data") or {}
    reduced_elements = []
    for element in data.get("elements", []):
        reduced = dict(element)
        content = reduced.get("content")
        if isinstance(content, str):
            reduced["content"] = content[:content_chars]
        style = reduced.get("style") or {}
        reduced["style"] = {key: style[key] for key in style_keys if key in style}
        reduced_elements.append(reduced)
    return {**payload, "data": {**data, "elements": reduced_elements}}


def fit_payload(payload: dict[str, Any], limit_bytes: int) -> tuple[dict[str, Any], bool]:
    """Return ``(payload, degraded)``, degrading when over *limit_bytes*."""
    size = payload_size(payload)
    if size <= limit_bytes:
        return payload, False
    reduced = degrade_payload(payload)
    logger.warning(
        "Save payload is %d bytes (limit %d); sending reduced payload of %d bytes",
        size,
        limit_bytes,
        payload_size(reduced),
    )
    return reduced, True


def default_elements() -> list[CanvasElement]:
    """Starter elements used when persisted data cannot be read."""
    return [
        CanvasElement(
            id="text-default-heading",
            type=ElementType.TEXT,
            position=Position(40, 40),
            z_index=FIRST_Z_INDEX,
            content="Your Name",
            style={
                **DEFAULT_ELEMENT_STYLES[ElementType.TEXT],
                "font_size": 32,
                "font_weight": "bold",
            },
        ),
        CanvasElement(
            id="section-default-experience",
            type=ElementType.SECTION,
            position=Position(0, 120),
            z_index=FIRST_Z_INDEX + 1,
            content=DEFAULT_SECTION_CONTENT,
            style=dict(DEFAULT_ELEMENT_STYLES[ElementType.SECTION]),
        ),
    ]


def elements_from_data(data: Any) -> list[CanvasElement]:
    """Parse the persisted ``data`` blob, falling back to default elements.

    Anything unreadable (wrong container types, invalid elements, duplicate
    ids) yields :func:`default_elements` rather than an empty canvas.
    """
    if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
        logger.warning("Project data has no element list; using default elements")
        return default_elements()
    try:
        parsed = [ElementPayload.model_validate(raw).to_element() for raw in data["elements"]]
    except ValidationError as exc:
        logger.warning(
            "Project data has %d invalid element field(s); using default elements",
            exc.error_count(),
        )
        return default_elements()
    if len({element.id for element in parsed}) != len(parsed):
        logger.warning("Project data has duplicate element ids; using default elements")
        return default_elements()
    return parsed
