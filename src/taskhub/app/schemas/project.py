"""Project-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator, model_validator

from ..models import DEFAULT_PROJECT_COLOR, HEX_COLOR_PATTERN, Project
from .common import CamelModel, reject_explicit_nulls, strip_text

PROJECT_READ_EXAMPLE = {
    "id": "665f1c2e8b3a4d0012345678",
    "userId": "665f1c2e8b3a4d0012345600",
    "name": "Work",
    "color": "#3366FF",
    "isFavorite": True,
    "taskCount": 4,
    "createdAt": "2024-06-04T12:00:00Z",
    "updatedAt": "2024-06-05T08:30:00Z",
}


class ProjectCreate(CamelModel):
    """Payload for creating a new project."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"name": "Work", "color": "#3366FF", "isFavorite": True}}
    )

    name: str = Field(min_length=1, max_length=100)
    color: str = Field(default=DEFAULT_PROJECT_COLOR, pattern=HEX_COLOR_PATTERN.pattern)
    is_favorite: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return strip_text(value)


class ProjectUpdate(CamelModel):
    """Partial update; omitted fields keep their stored values."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN.pattern)
    is_favorite: bool | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: object) -> object:
        return strip_text(value)

    @model_validator(mode="after")
    def _reject_nulls(self) -> "ProjectUpdate":
        reject_explicit_nulls(self, ("name", "color", "is_favorite"))
        return self


class ProjectRead(CamelModel):
    """Public representation of a project with its computed task count."""

    model_config = ConfigDict(json_schema_extra={"example": PROJECT_READ_EXAMPLE})

    id: str
    user_id: str
    name: str
    color: str
    is_favorite: bool
    task_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, project: Project, task_count: int = 0) -> "ProjectRead":
        return cls(
            id=str(project.id),
            user_id=str(project.user_id),
            name=project.name,
            color=project.color,
            is_favorite=project.is_favorite,
            task_count=task_count,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectResponse(CamelModel):
    project: ProjectRead


class ProjectMutationResponse(CamelModel):
    message: str
    project: ProjectRead


class ProjectListResponse(CamelModel):
    projects: list[ProjectRead]


__all__ = [
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectMutationResponse",
    "ProjectRead",
    "ProjectResponse",
    "ProjectUpdate",
]
