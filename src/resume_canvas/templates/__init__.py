"""Template registry for paginated resume rendering."""

from __future__ import annotations

from resume_canvas.templates.base import ResumeTemplate
from resume_canvas.templates.paginated import PaginatedResumeTemplate

__all__ = [
    "PaginatedResumeTemplate",
    "ResumeTemplate",
    "get_template",
    "list_templates",
]

_REGISTRY: dict[str, ResumeTemplate] = {
    "classic": PaginatedResumeTemplate("Classic", accent_hex="1E4D92"),
    "red-accent": PaginatedResumeTemplate("Red Accent", accent_hex="B22222"),
}


def get_template(name: str) -> ResumeTemplate:
    """Return the template registered under *name*.

    Raises:
        ValueError: If no template with that name exists.
    """
    try:
        return _REGISTRY[name]
    except KeyError:
        available = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown template {name!r}. Available: {available}"
        raise ValueError(msg) from None


def list_templates() -> list[str]:
    """Return sorted names of all registered templates."""
    return sorted(_REGISTRY)
