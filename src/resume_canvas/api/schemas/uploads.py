"""Pydantic schemas for image upload endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ImageUploadResponse(BaseModel):
    """Where an uploaded image can be fetched and how to delete it."""

    url: str = Field(description="URL serving the stored image")
    public_id: str = Field(description="Identifier used to delete the image")
