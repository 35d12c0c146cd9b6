"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr

from ..models import User
from .common import CamelModel


class UserPublic(CamelModel):
    """Public representation of a user; the password hash never leaves the service."""

    id: str
    name: str
    email: EmailStr
    created_at: datetime | None = None

    @classmethod
    def from_document(cls, user: User) -> "UserPublic":
        return cls(id=str(user.id), name=user.name, email=user.email, created_at=user.created_at)


__all__ = ["UserPublic"]
