"""Canvas geometry, element defaults, and autosave tuning constants.

Dimensions are CSS pixels. The canvas is an A4 sheet at 96 dpi.
"""

from __future__ import annotations

from enum import StrEnum


class ElementType(StrEnum):
    """Kinds of placeable canvas elements."""

    TEXT = "text"
    IMAGE = "image"
    SECTION = "section"
    ICON = "icon"
    SHAPE = "shape"


# Elements whose ``content`` is user-editable text.
TEXT_BEARING_TYPES = frozenset({ElementType.TEXT, ElementType.SECTION})

CANVAS_WIDTH = 794
CANVAS_HEIGHT = 1123

MIN_ELEMENT_WIDTH = 50
DUPLICATE_OFFSET = 20
FIRST_Z_INDEX = 1

DEFAULT_TEXT_CONTENT = "Double-click to edit text"
DEFAULT_SECTION_CONTENT = "Section Title"
DEFAULT_IMAGE_CONTENT = "placeholder://image"
DEFAULT_ICON_CONTENT = "★"

# Per-type (width, height) used when the style carries no explicit size.
DEFAULT_ELEMENT_SIZES: dict[ElementType, tuple[int, int]] = {
    ElementType.TEXT: (240, 40),
    ElementType.IMAGE: (160, 160),
    ElementType.SECTION: (CANVAS_WIDTH, 60),
    ElementType.ICON: (32, 32),
    ElementType.SHAPE: (80, 80),
}

DEFAULT_ELEMENT_STYLES: dict[ElementType, dict[str, object]] = {
    ElementType.TEXT: {
        "font_family": "Arial",
        "font_size": 16,
        "font_weight": "normal",
        "color": "#000000",
        "text_align": "left",
        "width": 240,
    },
    ElementType.IMAGE: {"width": 160, "height": 160, "object_fit": "cover"},
    ElementType.SECTION: {
        "font_family": "Arial",
        "font_size": 22,
        "font_weight": "bold",
        "color": "#ffffff",
        "background_color": "#1e4d92",
        "width": CANVAS_WIDTH,
        "height": 60,
    },
    ElementType.ICON: {"font_size": 24, "color": "#1e4d92", "width": 32, "height": 32},
    ElementType.SHAPE: {"background_color": "#1e4d92", "width": 80, "height": 80},
}

DEFAULT_PROJECT_NAME = "Untitled CV"

AUTOSAVE_QUIESCENCE_SECONDS = 5.0
PAYLOAD_LIMIT_BYTES = 1_000_000
CONTENT_TRUNCATION_CHARS = 1_000
DEGRADED_STYLE_KEYS = ("font_family", "font_size", "color", "font_weight")

EDITOR_PATH = "/editor"
PROJECT_QUERY_PARAM = "project"
