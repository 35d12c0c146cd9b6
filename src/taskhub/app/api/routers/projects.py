"""Routes handling project CRUD operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from ...deps import CurrentUserDependency, require_user_id
from ...schemas import (
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)
from ...services import ProjectService
from ...services.projects import ProjectWithCount

router = APIRouter(prefix="/projects", tags=["projects"])

DeleteTasksQuery = Annotated[
    bool,
    Query(
        alias="deleteTasks",
        description="Delete the project's tasks instead of detaching them.",
    ),
]


def _map_project(entry: ProjectWithCount) -> ProjectRead:
    return ProjectRead.from_document(entry.project, entry.task_count)


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List the caller's projects, favourites first",
)
async def list_projects(current_user: CurrentUserDependency) -> ProjectListResponse:
    entries = await ProjectService().list_projects(require_user_id(current_user))
    return ProjectListResponse(projects=[_map_project(entry) for entry in entries])


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Retrieve a project by id",
)
async def get_project(project_id: str, current_user: CurrentUserDependency) -> ProjectResponse:
    entry = await ProjectService().get_project(project_id, require_user_id(current_user))
    return ProjectResponse(project=_map_project(entry))


@router.post(
    "",
    response_model=ProjectMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
)
async def create_project(
    payload: ProjectCreate,
    current_user: CurrentUserDependency,
) -> ProjectMutationResponse:
    entry = await ProjectService().create_project(
        owner_id=require_user_id(current_user),
        name=payload.name,
        color=payload.color,
        is_favorite=payload.is_favorite,
    )
    return ProjectMutationResponse(message="Project created successfully.", project=_map_project(entry))


@router.put(
    "/{project_id}",
    response_model=ProjectMutationResponse,
    summary="Update an existing project",
)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    current_user: CurrentUserDependency,
) -> ProjectMutationResponse:
    entry = await ProjectService().update_project(
        project_id,
        require_user_id(current_user),
        payload.model_dump(exclude_unset=True),
    )
    return ProjectMutationResponse(message="Project updated successfully.", project=_map_project(entry))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a project, deleting or detaching its tasks",
)
async def delete_project(
    project_id: str,
    current_user: CurrentUserDependency,
    delete_tasks: DeleteTasksQuery = False,
) -> Response:
    await ProjectService().delete_project(
        project_id,
        require_user_id(current_user),
        delete_tasks=delete_tasks,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
