"""Motor client lifecycle and Beanie initialisation for the record store."""

from __future__ import annotations

import asyncio
import logging

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from ..core.config import get_settings
from ..models import DOCUMENT_MODELS, Project, Task, User

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_database: AsyncIOMotorDatabase | None = None
_initialized = False
_lock = asyncio.Lock()


def set_store_client(client: AsyncIOMotorClient | None) -> None:
    """Inject a custom motor client instance (primarily for tests)."""

    global _client, _database, _initialized
    _client = client
    _database = None
    _initialized = False


async def _ensure_indexes() -> None:
    users = User.get_motor_collection()
    await users.create_index([("email", ASCENDING)], unique=True, name="users_email_unique")

    projects = Project.get_motor_collection()
    await projects.create_index(
        [("user_id", ASCENDING), ("is_favorite", DESCENDING), ("created_at", DESCENDING)],
        name="projects_owner_listing",
    )

    tasks = Task.get_motor_collection()
    await tasks.create_index([("user_id", ASCENDING), ("completed", ASCENDING)], name="tasks_owner_completed")
    await tasks.create_index([("user_id", ASCENDING), ("project_id", ASCENDING)], name="tasks_owner_project")
    await tasks.create_index([("user_id", ASCENDING), ("due_date", ASCENDING)], name="tasks_owner_due_date")


async def init_record_store(*, client: AsyncIOMotorClient | None = None, force: bool = False) -> None:
    """Connect to MongoDB and bind the document models to the configured database."""

    global _client, _database, _initialized

    async with _lock:
        if client is not None:
            set_store_client(client)

        if _initialized and not force:
            return

        settings = get_settings()
        if _client is None:
            _client = AsyncIOMotorClient(settings.mongo_url, tz_aware=True, uuidRepresentation="standard")
        _database = _client[settings.mongo_database]

        await init_beanie(database=_database, document_models=list(DOCUMENT_MODELS))
        await _ensure_indexes()
        _initialized = True
        logger.info("Record store initialised", extra={"database": settings.mongo_database})


async def close_record_store() -> None:
    """Dispose the MongoDB client."""

    global _client, _database, _initialized
    client = _client
    if client is not None:
        client.close()
    _client = None
    _database = None
    _initialized = False


__all__ = [
    "close_record_store",
    "init_record_store",
    "set_store_client",
]
