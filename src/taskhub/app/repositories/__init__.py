"""Repositories encapsulating record store access."""

from __future__ import annotations

from .base import parse_object_id
from .projects import ProjectRepository
from .tasks import TaskRepository
from .users import UserRepository

__all__ = ["ProjectRepository", "TaskRepository", "UserRepository", "parse_object_id"]
