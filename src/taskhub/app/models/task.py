"""Task document and its completion state machine."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum

from beanie import PydanticObjectId
from pydantic import Field

from .common import TimestampedDocument, utcnow


class TaskPriority(IntEnum):
    """Lower number means more urgent."""

    URGENT = 1
    HIGH = 2
    MEDIUM = 3
    LOW = 4


class Task(TimestampedDocument):
    """Primary work item, optionally filed under one of the owner's projects."""

    user_id: PydanticObjectId
    project_id: PydanticObjectId | None = None
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    priority: TaskPriority = TaskPriority.LOW
    due_date: datetime | None = None
    completed: bool = False
    completed_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)

    class Settings:
        name = "tasks"


def apply_completion_state(task: Task, completed: bool, *, now: datetime | None = None) -> bool:
    """Move ``task`` to the requested completion state.

    This is the only code path that writes ``completed_at``: it is stamped on
    every transition into the completed state and cleared on every transition
    out of it. Returns ``True`` when the state actually changed.
    """

    if task.completed == completed:
        return False
    task.completed = completed
    task.completed_at = (now or utcnow()) if completed else None
    return True


__all__ = ["Task", "TaskPriority", "apply_completion_state"]
