"""Repository for task documents."""

from __future__ import annotations

from typing import Any

from beanie import PydanticObjectId

from ..models import Task, utcnow
from .base import OwnedRepository


class TaskRepository(OwnedRepository[Task]):
    """Owner-scoped persistence for ``Task`` documents."""

    def __init__(self) -> None:
        super().__init__(Task)

    async def find_page(
        self,
        query: dict[str, Any],
        *,
        sort: list[tuple[str, int]],
        skip: int,
        limit: int,
    ) -> list[Task]:
        """Return one window of ``query`` results; ``limit=0`` yields nothing."""
        if limit <= 0:
            return []
        return await Task.find(query).sort(sort).skip(skip).limit(limit).to_list()

    async def count(self, query: dict[str, Any]) -> int:
        return await Task.find(query).count()

    async def count_for_project(self, project_id: PydanticObjectId, owner_id: PydanticObjectId) -> int:
        return await self.count({"user_id": owner_id, "project_id": project_id})

    async def count_by_project(
        self,
        project_ids: list[PydanticObjectId],
        owner_id: PydanticObjectId,
    ) -> dict[PydanticObjectId, int]:
        """Task counts for every id in ``project_ids`` from a single aggregation."""
        if not project_ids:
            return {}
        pipeline = [
            {"$match": {"user_id": owner_id, "project_id": {"$in": project_ids}}},
            {"$group": {"_id": "$project_id", "count": {"$sum": 1}}},
        ]
        counts: dict[PydanticObjectId, int] = {project_id: 0 for project_id in project_ids}
        cursor = Task.get_motor_collection().aggregate(pipeline)
        async for row in cursor:
            counts[PydanticObjectId(row["_id"])] = row["count"]
        return counts

    async def delete_for_project(self, project_id: PydanticObjectId, owner_id: PydanticObjectId) -> int:
        """Remove every task of ``owner_id`` filed under ``project_id``."""
        result = await Task.get_motor_collection().delete_many(
            {"user_id": owner_id, "project_id": project_id}
        )
        return result.deleted_count

    async def detach_from_project(self, project_id: PydanticObjectId, owner_id: PydanticObjectId) -> int:
        """Clear ``project_id`` on every task of ``owner_id`` filed under it."""
        result = await Task.get_motor_collection().update_many(
            {"user_id": owner_id, "project_id": project_id},
            {"$set": {"project_id": None, "updated_at": utcnow()}},
        )
        return result.modified_count
