"""Thumbnail capture for canvas projects.

A capture turns the current canvas into an image reference. The autosave
engine treats capture as best-effort: any failure becomes
:meth:`Thumbnail.empty`.
"""

from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from xml.sax.saxutils import escape, quoteattr

from resume_canvas.constants.canvas_constants import TEXT_BEARING_TYPES
from resume_canvas.editor.elements import element_size

if TYPE_CHECKING:
    from resume_canvas.editor.element_store import ElementStore

__all__ = ["SvgThumbnailCapture", "Thumbnail", "ThumbnailCapture"]

THUMBNAIL_SCALE = 0.25
THUMBNAIL_TEXT_CHARS = 80
_PLACEHOLDER_FILL = "#e5e7eb"


@dataclass(frozen=True)
class Thumbnail:
    url: str
    public_id: str

    @classmethod
    def empty(cls) -> Thumbnail:
        return cls(url="", public_id="")

    @property
    def is_empty(self) -> bool:
        return not self.url


class ThumbnailCapture(Protocol):
    async def capture(self, region: ElementStore) -> Thumbnail: ...


def _font_size(value: object) -> float:
    try:
        return float(str(value).removesuffix("px"))
    except ValueError:
        return 16.0


class SvgThumbnailCapture:
    """Render element boxes into a scaled SVG ``data:`` URL."""

    def __init__(self, scale: float = THUMBNAIL_SCALE) -> None:
        self.scale = scale

    async def capture(self, region: ElementStore) -> Thumbnail:
        svg = self.render_svg(region)
        digest = hashlib.sha1(svg.encode("utf-8")).hexdigest()[:16]
        encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
        return Thumbnail(
            url=f"data:image/svg+xml;base64,{encoded}", public_id=f"thumbnail-{digest}"
        )

    def render_svg(self, region: ElementStore) -> str:
        canvas = region.canvas
        parts = [
            (
                '<svg xmlns="http://www.w3.org/2000/svg" '
                f'width="{canvas.width * self.scale:g}" height="{canvas.height * self.scale:g}" '
                f'viewBox="0 0 {canvas.width:g} {canvas.height:g}">'
            ),
            f'<rect width="{canvas.width:g}" height="{canvas.height:g}" fill="#ffffff"/>',
        ]
        for element in sorted(region.elements, key=lambda item: item.z_index):
            width, height = element_size(element)
            x, y = element.position.x, element.position.y
            fill = str(element.style.get("background_color", "none"))
            if element.type not in TEXT_BEARING_TYPES and fill == "none":
                fill = _PLACEHOLDER_FILL
            parts.append(
                f'<rect x="{x:g}" y="{y:g}" width="{width:g}" height="{height:g}" '
                f"fill={quoteattr(fill)}/>"
            )
            if element.type in TEXT_BEARING_TYPES and element.content:
                font_size = _font_size(element.style.get("font_size"))
                color = str(element.style.get("color", "#000000"))
                text = escape(element.content[:THUMBNAIL_TEXT_CHARS])
                parts.append(
                    f'<text x="{x:g}" y="{y + font_size:g}" font-size="{font_size:g}" '
                    f"fill={quoteattr(color)}>{text}</text>"
                )
        parts.append("</svg>")
        return "".join(parts)
