"""Repository for user documents."""

from __future__ import annotations

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Concrete repository for ``User`` documents."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, email: str) -> User | None:
        """Return the user registered under ``email`` (case-insensitive)."""
        return await self.find_one({"email": email.strip().lower()})
