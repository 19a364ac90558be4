"""ORM models package for database tables.

- CanvasProject: a saved resume canvas with its element data and thumbnail

All models inherit from the shared Base declarative class defined in data.db.
"""

from resume_canvas.data.db import Base
from resume_canvas.data.models.canvas_project import CanvasProject

__all__ = ["Base", "CanvasProject"]
