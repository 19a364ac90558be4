"""ORM model for a saved canvas project."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from resume_canvas.constants.canvas_constants import DEFAULT_PROJECT_NAME
from resume_canvas.data.db import Base


def _new_project_id() -> str:
    return uuid.uuid4().hex


class CanvasProject(Base):
    """A user's resume canvas: metadata, element blob and thumbnail."""

    __tablename__ = "canvas_projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_project_id)
    owner: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default=DEFAULT_PROJECT_NAME)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    thumbnail_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    thumbnail_public_id: Mapped[str] = mapped_column(String, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    def __repr__(self) -> str:
        return f"<CanvasProject(id={self.id!r}, owner={self.owner!r}, name={self.name!r})>"
