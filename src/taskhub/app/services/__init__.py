"""Service layer exports."""

from __future__ import annotations

from .auth import AuthService
from .projects import ProjectService
from .task_query import TaskQuery
from .tasks import TaskService
from .users import UserService

__all__ = ["AuthService", "ProjectService", "TaskQuery", "TaskService", "UserService"]
