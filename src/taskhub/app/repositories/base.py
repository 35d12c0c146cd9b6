"""Base repository for owner-scoped Beanie documents."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from beanie import Document, PydanticObjectId
from bson import ObjectId
from bson.errors import InvalidId

DocumentType = TypeVar("DocumentType", bound=Document)


def parse_object_id(raw: object) -> PydanticObjectId | None:
    """Return ``raw`` as an ObjectId, or ``None`` when it is not a valid one."""

    if isinstance(raw, ObjectId):
        return PydanticObjectId(raw)
    try:
        return PydanticObjectId(str(raw))
    except (InvalidId, TypeError):
        return None


class BaseRepository(Generic[DocumentType]):
    """Persistence helpers shared by the concrete repositories."""

    def __init__(self, model_type: type[DocumentType]) -> None:
        self._model_type = model_type

    async def get(self, entity_id: object) -> DocumentType | None:
        """Retrieve a document by id; malformed ids simply match nothing."""
        object_id = parse_object_id(entity_id)
        if object_id is None:
            return None
        return await self._model_type.get(object_id)

    async def find_one(self, query: dict[str, Any]) -> DocumentType | None:
        return await self._model_type.find_one(query)

    async def add(self, instance: DocumentType) -> DocumentType:
        """Insert a new document and return it with its id populated."""
        await instance.insert()
        return instance

    async def save(self, instance: DocumentType) -> DocumentType:
        await instance.save()
        return instance

    async def delete(self, instance: DocumentType) -> None:
        await instance.delete()


class OwnedRepository(BaseRepository[DocumentType]):
    """Repository whose every lookup is scoped by ``(id, user_id)``."""

    async def get_for_owner(self, entity_id: object, owner_id: PydanticObjectId) -> DocumentType | None:
        """Return the document only if it exists *and* belongs to ``owner_id``."""
        object_id = parse_object_id(entity_id)
        if object_id is None:
            return None
        return await self.find_one({"_id": object_id, "user_id": owner_id})


__all__ = ["BaseRepository", "DocumentType", "OwnedRepository", "parse_object_id"]
