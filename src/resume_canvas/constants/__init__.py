from __future__ import annotations

from resume_canvas.constants.canvas_constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    TEXT_BEARING_TYPES,
    ElementType,
)
from resume_canvas.constants.pagination_constants import (
    MAX_EDUCATIONS_PER_PAGE,
    MAX_EXPERIENCES_PER_PAGE,
    MAX_PROJECTS_PER_PAGE,
)

__all__ = [
    "CANVAS_HEIGHT",
    "CANVAS_WIDTH",
    "ElementType",
    "MAX_EDUCATIONS_PER_PAGE",
    "MAX_EXPERIENCES_PER_PAGE",
    "MAX_PROJECTS_PER_PAGE",
    "TEXT_BEARING_TYPES",
]
