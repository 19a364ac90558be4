"""Canvas project routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from resume_canvas.api.dependencies import get_current_username
from resume_canvas.api.schemas.projects import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
)
from resume_canvas.services.canvas_projects import (
    create_project,
    delete_project,
    get_project,
    list_projects,
    update_project,
)

router = APIRouter(prefix="/projects", tags=["projects"])

_NOT_FOUND = "Project not found."


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=_NOT_FOUND)


@router.get(
    "",
    response_model=list[ProjectResponse],
    summary="List projects",
    description="Return the caller's projects ordered by most recently updated.",
)
def list_projects_endpoint(
    current_username: Annotated[str, Depends(get_current_username)],
) -> list[ProjectResponse]:
    results = list_projects(current_username)
    if results is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list projects.",
        )
    return [ProjectResponse(**r) for r in results]


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get a project",
    responses={404: {"description": "Project not found"}},
)
def get_project_endpoint(
    project_id: Annotated[str, Path(description="Project ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> ProjectResponse:
    result = get_project(current_username, project_id)
    if not result:
        raise _not_found()
    return ProjectResponse(**result)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
def create_project_endpoint(
    data: ProjectCreateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ProjectResponse:
    result = create_project(current_username, data.model_dump())
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create project.",
        )
    return ProjectResponse(**result)


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update a project",
    description="Update a project. Only provided fields are changed.",
    responses={404: {"description": "Project not found"}},
)
def update_project_endpoint(
    project_id: Annotated[str, Path(description="Project ID")],
    data: ProjectUpdateRequest,
    current_username: Annotated[str, Depends(get_current_username)],
) -> ProjectResponse:
    update_dict = data.model_dump(exclude_unset=True)
    result = update_project(current_username, project_id, update_dict)
    if not result:
        if get_project(current_username, project_id) is None:
            raise _not_found()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update project.",
        )
    return ProjectResponse(**result)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project",
    responses={404: {"description": "Project not found"}},
)
def delete_project_endpoint(
    project_id: Annotated[str, Path(description="Project ID")],
    current_username: Annotated[str, Depends(get_current_username)],
) -> Response:
    if not delete_project(current_username, project_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
