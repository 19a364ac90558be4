"""Pydantic schemas for canvas project API endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ThumbnailSchema(BaseModel):
    """Thumbnail reference stored with a project."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field("", description="Data URL or remote image URL")
    public_id: str = Field(
        "",
        validation_alias=AliasChoices("public_id", "publicId"),
        description="Opaque identifier of the stored image",
    )


class ProjectCreateRequest(BaseModel):
    """Request schema for creating a canvas project."""

    name: str | None = Field(None, description="Project name (defaults to 'Untitled CV')")
    description: str | None = Field(None, description="Free-form project description")
    data: dict[str, Any] = Field(default_factory=dict, description="Element data blob")
    thumbnail: ThumbnailSchema | None = Field(None, description="Thumbnail reference")


class ProjectUpdateRequest(BaseModel):
    """Request schema for updating a canvas project.

    All fields are optional; only provided fields are updated.
    """

    name: str | None = Field(None, description="Project name")
    description: str | None = Field(None, description="Free-form project description")
    data: dict[str, Any] | None = Field(None, description="Element data blob")
    thumbnail: ThumbnailSchema | None = Field(None, description="Thumbnail reference")


class ProjectResponse(BaseModel):
    """Response schema for a canvas project."""

    id: str
    name: str
    description: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
    thumbnail: ThumbnailSchema = Field(default_factory=ThumbnailSchema)
    created_at: datetime
    updated_at: datetime
