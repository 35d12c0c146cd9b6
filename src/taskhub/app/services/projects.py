"""Service layer for projects, including the cascading delete policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from beanie import PydanticObjectId

from ..errors import NotFoundError
from ..models import DEFAULT_PROJECT_COLOR, Project
from ..repositories import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found."
_UPDATABLE_FIELDS = ("name", "color", "is_favorite")


@dataclass(slots=True)
class ProjectWithCount:
    """A project together with the number of tasks currently filed under it."""

    project: Project
    task_count: int


@dataclass(slots=True)
class ProjectDeletion:
    project_id: PydanticObjectId
    tasks_deleted: int = 0
    tasks_detached: int = 0


class ProjectService:
    """Owner-scoped project operations."""

    def __init__(self) -> None:
        self._repository = ProjectRepository()
        self._task_repository = TaskRepository()

    async def _require(self, project_id: object, owner_id: PydanticObjectId) -> Project:
        project = await self._repository.get_for_owner(project_id, owner_id)
        if project is None:
            raise NotFoundError(PROJECT_NOT_FOUND)
        return project

    async def _with_count(self, project: Project) -> ProjectWithCount:
        assert project.id is not None
        count = await self._task_repository.count_for_project(project.id, project.user_id)
        return ProjectWithCount(project=project, task_count=count)

    async def list_projects(self, owner_id: PydanticObjectId) -> list[ProjectWithCount]:
        """Favourites first, then newest first."""
        projects = await self._repository.list_for_owner(owner_id)
        counts = await self._task_repository.count_by_project(
            [project.id for project in projects if project.id is not None],
            owner_id,
        )
        return [ProjectWithCount(project=project, task_count=counts.get(project.id, 0)) for project in projects]

    async def get_project(self, project_id: object, owner_id: PydanticObjectId) -> ProjectWithCount:
        return await self._with_count(await self._require(project_id, owner_id))

    async def create_project(
        self,
        *,
        owner_id: PydanticObjectId,
        name: str,
        color: str | None = None,
        is_favorite: bool | None = None,
    ) -> ProjectWithCount:
        project = Project(
            user_id=owner_id,
            name=name.strip(),
            color=color or DEFAULT_PROJECT_COLOR,
            is_favorite=bool(is_favorite),
        )
        await self._repository.add(project)
        logger.info("Project created", extra={"project_id": str(project.id)})
        return ProjectWithCount(project=project, task_count=0)

    async def update_project(
        self,
        project_id: object,
        owner_id: PydanticObjectId,
        changes: dict[str, Any],
    ) -> ProjectWithCount:
        """Apply a partial update; keys absent from ``changes`` stay untouched."""
        project = await self._require(project_id, owner_id)
        for field in _UPDATABLE_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if field == "name":
                value = value.strip()
            setattr(project, field, value)
        project.touch()
        await self._repository.save(project)
        return await self._with_count(project)

    async def delete_project(
        self,
        project_id: object,
        owner_id: PydanticObjectId,
        *,
        delete_tasks: bool = False,
    ) -> ProjectDeletion:
        """Remove a project and either delete or detach its tasks.

        The task-side effect runs first and the project is removed only once it
        succeeded, so a failure leaves the project in place and propagates to
        the caller instead of orphaning references to a missing project.
        """
        project = await self._require(project_id, owner_id)
        assert project.id is not None
        outcome = ProjectDeletion(project_id=project.id)
        if delete_tasks:
            outcome.tasks_deleted = await self._task_repository.delete_for_project(project.id, owner_id)
        else:
            outcome.tasks_detached = await self._task_repository.detach_from_project(project.id, owner_id)
        await self._repository.delete(project)
        logger.info(
            "Project deleted",
            extra={
                "project_id": str(project.id),
                "tasks_deleted": outcome.tasks_deleted,
                "tasks_detached": outcome.tasks_detached,
            },
        )
        return outcome


__all__ = ["PROJECT_NOT_FOUND", "ProjectDeletion", "ProjectService", "ProjectWithCount"]
