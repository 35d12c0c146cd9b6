"""Service layer encapsulating task business logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from beanie import PydanticObjectId

from ..errors import NotFoundError, ValidationError
from ..models import Project, Task, TaskPriority, apply_completion_state, utcnow
from ..repositories import ProjectRepository, TaskRepository
from .task_query import TaskQuery

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found."
INVALID_PROJECT_MESSAGE = "Project not found."
_PLAIN_FIELDS = ("title", "description", "priority", "due_date", "tags")


@dataclass(slots=True)
class TaskView:
    """A task paired with the project it is filed under, if any."""

    task: Task
    project: Project | None = None


@dataclass(slots=True)
class TaskPage:
    items: list[TaskView]
    page: int
    limit: int
    total: int
    pages: int


class TaskService:
    """Owner-scoped task operations."""

    def __init__(self) -> None:
        self._repository = TaskRepository()
        self._project_repository = ProjectRepository()

    async def _require(self, task_id: object, owner_id: PydanticObjectId) -> Task:
        task = await self._repository.get_for_owner(task_id, owner_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return task

    async def _resolve_project(self, raw_project_id: str | None, owner_id: PydanticObjectId) -> Project | None:
        """Return the caller's project for ``raw_project_id`` or fail on ``projectId``.

        Unknown ids and ids of someone else's project get the same error.
        """
        if raw_project_id is None:
            return None
        project = await self._project_repository.get_for_owner(raw_project_id, owner_id)
        if project is None:
            raise ValidationError(INVALID_PROJECT_MESSAGE, field="projectId")
        return project

    async def _project_for(self, task: Task) -> Project | None:
        if task.project_id is None:
            return None
        return await self._project_repository.get_for_owner(task.project_id, task.user_id)

    async def list_tasks(self, owner_id: PydanticObjectId, query: TaskQuery) -> TaskPage:
        """Run a filtered, sorted and paginated listing for ``owner_id``."""
        criteria = query.build_filter(owner_id)
        total = await self._repository.count(criteria)
        tasks: list[Task] = []
        # A window starting past the last match is empty; skipping the query
        # also keeps huge page numbers from overflowing the int64 skip.
        if query.skip < total:
            tasks = await self._repository.find_page(
                criteria,
                sort=query.sort_spec(),
                skip=query.skip,
                limit=query.limit,
            )

        project_ids = list({task.project_id for task in tasks if task.project_id is not None})
        projects = {
            project.id: project
            for project in await self._project_repository.list_by_ids(project_ids, owner_id)
        }
        items = [TaskView(task=task, project=projects.get(task.project_id)) for task in tasks]
        return TaskPage(
            items=items,
            page=query.page,
            limit=query.limit,
            total=total,
            pages=query.page_count(total),
        )

    async def get_task(self, task_id: object, owner_id: PydanticObjectId) -> TaskView:
        task = await self._require(task_id, owner_id)
        return TaskView(task=task, project=await self._project_for(task))

    async def create_task(
        self,
        *,
        owner_id: PydanticObjectId,
        title: str,
        description: str = "",
        priority: TaskPriority | int = TaskPriority.LOW,
        due_date: datetime | None = None,
        project_id: str | None = None,
        tags: list[str] | None = None,
        completed: bool = False,
    ) -> TaskView:
        project = await self._resolve_project(project_id, owner_id)
        task = Task(
            user_id=owner_id,
            project_id=project.id if project is not None else None,
            title=title.strip(),
            description=description,
            priority=TaskPriority(priority),
            due_date=due_date,
            tags=list(tags or []),
        )
        apply_completion_state(task, completed, now=task.created_at)
        await self._repository.add(task)
        logger.info("Task created", extra={"task_id": str(task.id)})
        return TaskView(task=task, project=project)

    async def update_task(
        self,
        task_id: object,
        owner_id: PydanticObjectId,
        changes: dict[str, Any],
    ) -> TaskView:
        """Apply a partial update; keys absent from ``changes`` stay untouched.

        ``completed_at`` is recomputed through :func:`apply_completion_state`
        whenever ``completed`` changes, so it is never taken from the payload.
        """
        task = await self._require(task_id, owner_id)
        now = utcnow()

        if "project_id" in changes:
            project = await self._resolve_project(changes["project_id"], owner_id)
            task.project_id = project.id if project is not None else None

        for field in _PLAIN_FIELDS:
            if field in changes:
                value = changes[field]
                if field == "priority":
                    value = TaskPriority(value)
                elif field == "tags":
                    value = list(value)
                setattr(task, field, value)

        if "completed" in changes:
            apply_completion_state(task, bool(changes["completed"]), now=now)

        task.touch(now)
        await self._repository.save(task)
        return TaskView(task=task, project=await self._project_for(task))

    async def toggle_task(self, task_id: object, owner_id: PydanticObjectId) -> TaskView:
        """Flip ``completed`` and recompute ``completed_at`` accordingly."""
        task = await self._require(task_id, owner_id)
        now = utcnow()
        apply_completion_state(task, not task.completed, now=now)
        task.touch(now)
        await self._repository.save(task)
        logger.info(
            "Task completion toggled",
            extra={"task_id": str(task.id), "completed": task.completed},
        )
        return TaskView(task=task, project=await self._project_for(task))

    async def delete_task(self, task_id: object, owner_id: PydanticObjectId) -> None:
        task = await self._require(task_id, owner_id)
        await self._repository.delete(task)
        logger.info("Task deleted", extra={"task_id": str(task.id)})


__all__ = ["TASK_NOT_FOUND", "TaskPage", "TaskService", "TaskView"]
