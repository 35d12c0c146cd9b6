"""Repository for project documents."""

from __future__ import annotations

from beanie import PydanticObjectId
from pymongo import DESCENDING

from ..models import Project
from .base import OwnedRepository


class ProjectRepository(OwnedRepository[Project]):
    """Owner-scoped persistence for ``Project`` documents."""

    def __init__(self) -> None:
        super().__init__(Project)

    async def list_for_owner(self, owner_id: PydanticObjectId) -> list[Project]:
        """Favourites first, then newest first; ``_id`` breaks exact ties."""
        return await (
            Project.find({"user_id": owner_id})
            .sort([("is_favorite", DESCENDING), ("created_at", DESCENDING), ("_id", DESCENDING)])
            .to_list()
        )

    async def list_by_ids(
        self,
        project_ids: list[PydanticObjectId],
        owner_id: PydanticObjectId,
    ) -> list[Project]:
        if not project_ids:
            return []
        return await Project.find({"_id": {"$in": project_ids}, "user_id": owner_id}).to_list()
