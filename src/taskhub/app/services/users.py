"""Service layer for user accounts."""

from __future__ import annotations

from ..core.security import get_password_hash
from ..models import User
from ..repositories import UserRepository


def normalise_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """High-level operations for ``User`` documents."""

    def __init__(self) -> None:
        self._repository = UserRepository()

    async def create_user(self, *, name: str, email: str, password: str) -> User:
        """Hash ``password`` and persist a new user.

        Hashing happens here, before the insert, rather than in a save hook.
        Email uniqueness is enforced by the unique index; callers wanting a
        friendly error check :meth:`get_user_by_email` first.
        """
        user = User(
            name=name.strip(),
            email=normalise_email(email),
            hashed_password=get_password_hash(password),
        )
        return await self._repository.add(user)

    async def get_user(self, user_id: object) -> User | None:
        return await self._repository.get(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._repository.get_by_email(email)


__all__ = ["UserService", "normalise_email"]
