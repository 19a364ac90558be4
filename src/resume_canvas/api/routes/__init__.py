"""Route handlers for the API."""

from resume_canvas.api.routes import health, projects, uploads

__all__ = ["health", "projects", "uploads"]
