"""Translation of task listing parameters into a scoped record-store query."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from beanie import PydanticObjectId
from pymongo import ASCENDING, DESCENDING

from ..errors import ValidationError
from ..repositories import parse_object_id

NO_PROJECT_SENTINEL = "null"
DEFAULT_SORT_FIELD = "created_at"
DEFAULT_PAGE_SIZE = 50

# Public (camelCase) and storage (snake_case) spellings both resolve to the stored field.
SORTABLE_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "dueDate": "due_date",
    "completedAt": "completed_at",
    "priority": "priority",
    "title": "title",
    "completed": "completed",
}
SORTABLE_FIELDS.update({stored: stored for stored in list(SORTABLE_FIELDS.values())})


@dataclass(slots=True)
class TaskQuery:
    """Optional filters, sort and pagination for a task listing.

    ``project_id`` is either a concrete project id, the ``"null"`` sentinel
    (tasks without a project) or ``None``/empty (no project filter). The
    caller's identity is never part of this object: it is supplied separately
    to :meth:`build_filter` so it cannot be overridden by request input.
    """

    project_id: str | None = None
    priority: int | None = None
    completed: bool | None = None
    q: str | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    sort_by: str = "createdAt"
    sort_order: str = "desc"

    def build_filter(self, owner_id: PydanticObjectId) -> dict[str, Any]:
        """Return the conjunctive Mongo filter for ``owner_id``."""

        query: dict[str, Any] = {"user_id": owner_id}

        if self.project_id:
            if self.project_id == NO_PROJECT_SENTINEL:
                query["project_id"] = None
            else:
                project_id = parse_object_id(self.project_id)
                if project_id is None:
                    raise ValidationError("Invalid project id.", field="projectId")
                query["project_id"] = project_id

        if self.priority is not None:
            query["priority"] = int(self.priority)

        if self.completed is not None:
            query["completed"] = self.completed

        term = (self.q or "").strip()
        if term:
            pattern = {"$regex": re.escape(term), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"description": pattern}]

        return query

    @property
    def sort_field(self) -> str:
        return SORTABLE_FIELDS.get(self.sort_by, DEFAULT_SORT_FIELD)

    @property
    def sort_direction(self) -> int:
        return ASCENDING if (self.sort_order or "").lower() == "asc" else DESCENDING

    def sort_spec(self) -> list[tuple[str, int]]:
        """Requested ordering followed by ``_id`` so pages never overlap or skip rows."""

        direction = self.sort_direction
        return [(self.sort_field, direction), ("_id", direction)]

    @property
    def skip(self) -> int:
        return max(self.page - 1, 0) * max(self.limit, 0)

    def page_count(self, total: int) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(total / self.limit)


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "NO_PROJECT_SENTINEL",
    "SORTABLE_FIELDS",
    "TaskQuery",
]
