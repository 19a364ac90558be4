"""Canvas project service backing the persistence API.

Every operation is scoped to an owner. A project that exists but belongs to
somebody else is reported exactly like a missing one.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any, TypedDict

from sqlalchemy.orm import Session

from resume_canvas.constants.canvas_constants import DEFAULT_PROJECT_NAME
from resume_canvas.data.db import get_session
from resume_canvas.data.models import CanvasProject

logger = logging.getLogger(__name__)

__all__ = [
    "CanvasProjectData",
    "create_project",
    "delete_project",
    "get_project",
    "list_projects",
    "update_project",
]


class ThumbnailData(TypedDict, total=False):
    url: str
    public_id: str


class CanvasProjectData(TypedDict, total=False):
    """Fields accepted on create and update."""

    name: str
    description: str
    data: dict[str, Any]
    thumbnail: ThumbnailData | None


def _project_to_dict(project: CanvasProject) -> dict:
    return {
        "id": project.id,
        "owner": project.owner,
        "name": project.name,
        "description": project.description,
        "data": project.data or {},
        "thumbnail": {
            "url": project.thumbnail_url or "",
            "public_id": project.thumbnail_public_id or "",
        },
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def _get_owned_project(session: Session, owner: str, project_id: str) -> CanvasProject | None:
    return (
        session.query(CanvasProject)
        .filter(CanvasProject.id == project_id, CanvasProject.owner == owner)
        .first()
    )


def _apply_project_updates(project: CanvasProject, project_data: CanvasProjectData) -> None:
    if "name" in project_data:
        project.name = project_data["name"] or DEFAULT_PROJECT_NAME
    if "description" in project_data:
        project.description = project_data["description"] or ""
    if "data" in project_data:
        project.data = project_data["data"] or {}
    if "thumbnail" in project_data:
        thumbnail = project_data["thumbnail"] or {}
        project.thumbnail_url = thumbnail.get("url") or ""
        project.thumbnail_public_id = thumbnail.get("public_id") or ""


def _describe_payload(project_data: CanvasProjectData) -> tuple[int, int]:
    """Return (serialized data size in bytes, element count) for logging."""
    data = project_data.get("data") or {}
    size = len(json.dumps(data, separators=(",", ":")).encode("utf-8"))
    elements = data.get("elements") if isinstance(data, dict) else None
    return size, len(elements) if isinstance(elements, list) else 0


def list_projects(owner: str) -> list[dict] | None:
    """Return the owner's projects, most recently updated first."""
    try:
        with get_session() as session:
            projects = (
                session.query(CanvasProject)
                .filter(CanvasProject.owner == owner)
                .order_by(CanvasProject.updated_at.desc(), CanvasProject.created_at.desc())
                .all()
            )
            return [_project_to_dict(p) for p in projects]

    except Exception:
        logger.exception("Failed to list projects for %s", owner)
        return None


def get_project(owner: str, project_id: str) -> dict | None:
    try:
        with get_session() as session:
            project = _get_owned_project(session, owner, project_id)
            if not project:
                return None
            return _project_to_dict(project)

    except Exception:
        logger.exception("Failed to get project %s for %s", project_id, owner)
        return None


def create_project(owner: str, project_data: CanvasProjectData) -> dict | None:
    """Create a project for *owner*.

    Args:
        owner: Username of the caller.
        project_data: Initial fields; ``name`` defaults to "Untitled CV".

    Returns:
        Dictionary with the created project, or None if creation failed.
    """
    size, element_count = _describe_payload(project_data)
    logger.info("Creating project for %s: %d bytes, %d elements", owner, size, element_count)

    try:
        with get_session() as session:
            project = CanvasProject(owner=owner, name=DEFAULT_PROJECT_NAME, description="", data={})
            _apply_project_updates(project, project_data)
            session.add(project)
            session.commit()
            return _project_to_dict(project)

    except Exception:
        logger.exception("Failed to create project for %s", owner)
        return None


def update_project(owner: str, project_id: str, project_data: CanvasProjectData) -> dict | None:
    """Update an owned project. Only the provided fields change.

    Returns:
        Dictionary with the updated project, or None if it was not found or
        the update failed.
    """
    size, element_count = _describe_payload(project_data)
    logger.info(
        "Updating project %s for %s: %d bytes, %d elements",
        project_id,
        owner,
        size,
        element_count,
    )

    try:
        with get_session() as session:
            project = _get_owned_project(session, owner, project_id)
            if not project:
                return None

            _apply_project_updates(project, project_data)
            # Touch even when nothing changed so the dashboard order follows saves.
            project.updated_at = datetime.now(UTC)
            session.commit()
            return _project_to_dict(project)

    except Exception:
        logger.exception("Failed to update project %s for %s", project_id, owner)
        return None


def delete_project(owner: str, project_id: str) -> bool:
    try:
        with get_session() as session:
            project = _get_owned_project(session, owner, project_id)
            if not project:
                return False

            session.delete(project)
            session.commit()
            return True

    except Exception:
        logger.exception("Failed to delete project %s for %s", project_id, owner)
        return False
