"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models import Project, Task, TaskPriority
from .common import CamelModel, reject_explicit_nulls, strip_text

TASK_READ_EXAMPLE = {
    "id": "665f1c2e8b3a4d0012345699",
    "userId": "665f1c2e8b3a4d0012345600",
    "projectId": "665f1c2e8b3a4d0012345678",
    "project": {"id": "665f1c2e8b3a4d0012345678", "name": "Work", "color": "#3366FF"},
    "title": "Draft release notes",
    "description": "Summarise the changes since the last release.",
    "priority": 2,
    "dueDate": "2024-06-10T17:00:00Z",
    "completed": False,
    "completedAt": None,
    "tags": ["writing"],
    "createdAt": "2024-06-04T12:00:00Z",
    "updatedAt": "2024-06-04T12:00:00Z",
}


def _clean_tags(value: object) -> object:
    """Trim each tag and drop the ones left empty."""
    if not isinstance(value, list):
        return value
    cleaned: list[object] = []
    for tag in value:
        if isinstance(tag, str):
            tag = tag.strip()
            if not tag:
                continue
        cleaned.append(tag)
    return cleaned


class TaskCreate(CamelModel):
    """Payload for creating a new task."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Draft release notes",
                "priority": 2,
                "dueDate": "2024-06-10T17:00:00Z",
                "projectId": "665f1c2e8b3a4d0012345678",
                "tags": ["writing"],
            }
        }
    )

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    priority: TaskPriority = TaskPriority.LOW
    due_date: datetime | None = None
    project_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    completed: bool = False

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return strip_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: object) -> object:
        return _clean_tags(value)


class TaskUpdate(CamelModel):
    """Partial update; ``dueDate`` and ``projectId`` may be cleared with ``null``."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    project_id: str | None = None
    tags: list[str] | None = None
    completed: bool | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return strip_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: object) -> object:
        return _clean_tags(value)

    @model_validator(mode="after")
    def _reject_nulls(self) -> "TaskUpdate":
        reject_explicit_nulls(self, ("title", "description", "priority", "tags", "completed"))
        return self


class ProjectSummary(CamelModel):
    """The ``name``/``color`` of the project a task is filed under."""

    id: str
    name: str
    color: str

    @classmethod
    def from_document(cls, project: Project) -> "ProjectSummary":
        return cls(id=str(project.id), name=project.name, color=project.color)


class TaskRead(CamelModel):
    """Public representation of a task."""

    model_config = ConfigDict(json_schema_extra={"example": TASK_READ_EXAMPLE})

    id: str
    user_id: str
    project_id: str | None = None
    project: ProjectSummary | None = None
    title: str
    description: str
    priority: TaskPriority
    due_date: datetime | None = None
    completed: bool
    completed_at: datetime | None = None
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, task: Task, project: Project | None = None) -> "TaskRead":
        return cls(
            id=str(task.id),
            user_id=str(task.user_id),
            project_id=str(task.project_id) if task.project_id is not None else None,
            project=ProjectSummary.from_document(project) if project is not None else None,
            title=task.title,
            description=task.description,
            priority=task.priority,
            due_date=task.due_date,
            completed=task.completed,
            completed_at=task.completed_at,
            tags=list(task.tags),
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskResponse(CamelModel):
    task: TaskRead


class TaskMutationResponse(CamelModel):
    message: str
    task: TaskRead


class PaginationMeta(CamelModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=0)
    total: int = Field(ge=0)
    pages: int = Field(ge=0)


class TaskListResponse(CamelModel):
    """One page of tasks plus pagination metadata."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tasks": [TASK_READ_EXAMPLE],
                "pagination": {"page": 1, "limit": 50, "total": 1, "pages": 1},
            }
        }
    )

    tasks: list[TaskRead]
    pagination: PaginationMeta


__all__ = [
    "PaginationMeta",
    "ProjectSummary",
    "TaskCreate",
    "TaskListResponse",
    "TaskMutationResponse",
    "TaskRead",
    "TaskResponse",
    "TaskUpdate",
]
