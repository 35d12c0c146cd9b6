"""User document."""

from __future__ import annotations

from pydantic import Field

from .common import TimestampedDocument


class User(TimestampedDocument):
    """Registered account; ``email`` is unique across all users."""

    name: str = Field(min_length=2, max_length=50)
    email: str = Field(max_length=320)
    hashed_password: str

    class Settings:
        name = "users"


__all__ = ["User"]
