"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import AuthResponse, CurrentUserResponse, LoginRequest, SignupRequest, TokenPayload
from .project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectMutationResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)
from .system import ErrorResponse, HealthCheckResponse, MessageResponse, RootResponse
from .task import (
    PaginationMeta,
    ProjectSummary,
    TaskCreate,
    TaskListResponse,
    TaskMutationResponse,
    TaskRead,
    TaskResponse,
    TaskUpdate,
)
from .user import UserPublic

__all__ = [
    "AuthResponse",
    "CurrentUserResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "LoginRequest",
    "MessageResponse",
    "PaginationMeta",
    "ProjectCreate",
    "ProjectListResponse",
    "ProjectMutationResponse",
    "ProjectRead",
    "ProjectResponse",
    "ProjectSummary",
    "ProjectUpdate",
    "RootResponse",
    "SignupRequest",
    "TaskCreate",
    "TaskListResponse",
    "TaskMutationResponse",
    "TaskRead",
    "TaskResponse",
    "TaskUpdate",
    "TokenPayload",
    "UserPublic",
]
