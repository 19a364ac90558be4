"""Canvas element value types and per-type defaults."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from resume_canvas.constants.canvas_constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DEFAULT_ELEMENT_SIZES,
    DEFAULT_ELEMENT_STYLES,
    DEFAULT_ICON_CONTENT,
    DEFAULT_IMAGE_CONTENT,
    DEFAULT_SECTION_CONTENT,
    DEFAULT_TEXT_CONTENT,
    ElementType,
)

__all__ = [
    "CanvasElement",
    "CanvasSize",
    "Position",
    "Viewport",
    "default_content",
    "default_style",
    "element_size",
    "new_element_id",
]


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class CanvasSize:
    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT


@dataclass(frozen=True)
class Viewport:
    """Visible part of the canvas: scroll offset plus visible size."""

    x: float = 0
    y: float = 0
    width: float = CANVAS_WIDTH
    height: float = CANVAS_HEIGHT

    @property
    def center(self) -> Position:
        return Position(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class CanvasElement:
    """One placeable unit on the canvas.

    Instances are immutable; the store swaps in modified copies so that a
    previously taken element list never changes underneath its holder.
    """

    id: str
    type: ElementType
    position: Position
    z_index: int
    content: str | None = None
    style: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "content": self.content,
            "style": dict(self.style),
            "position": {"x": self.position.x, "y": self.position.y},
            "z_index": self.z_index,
        }


def new_element_id(element_type: ElementType) -> str:
    return f"{element_type.value}-{uuid.uuid4().hex[:12]}"


def default_content(element_type: ElementType) -> str | None:
    return {
        ElementType.TEXT: DEFAULT_TEXT_CONTENT,
        ElementType.SECTION: DEFAULT_SECTION_CONTENT,
        ElementType.IMAGE: DEFAULT_IMAGE_CONTENT,
        ElementType.ICON: DEFAULT_ICON_CONTENT,
    }.get(element_type)


def default_style(element_type: ElementType) -> dict[str, Any]:
    return dict(DEFAULT_ELEMENT_STYLES[element_type])


def _numeric(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    return None


def element_size(element: CanvasElement) -> tuple[float, float]:
    """Return ``(width, height)`` from the style, else the type default."""
    default_width, default_height = DEFAULT_ELEMENT_SIZES[element.type]
    width = _numeric(element.style.get("width"))
    height = _numeric(element.style.get("height"))
    return (
        width if width is not None else float(default_width),
        height if height is not None else float(default_height),
    )
