"""Document models exposed by the application."""

from __future__ import annotations

from .common import TimestampedDocument, utcnow
from .project import DEFAULT_PROJECT_COLOR, HEX_COLOR_PATTERN, Project
from .task import Task, TaskPriority, apply_completion_state
from .user import User

DOCUMENT_MODELS = [User, Project, Task]

__all__ = [
    "DEFAULT_PROJECT_COLOR",
    "DOCUMENT_MODELS",
    "HEX_COLOR_PATTERN",
    "Project",
    "Task",
    "TaskPriority",
    "TimestampedDocument",
    "User",
    "apply_completion_state",
    "utcnow",
]
