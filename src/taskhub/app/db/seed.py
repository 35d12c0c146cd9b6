"""Seed script for populating development data."""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta

from ..core.config import get_settings
from ..core.logging import configure_logging
from ..models import Project, Task, User, utcnow
from ..services import ProjectService, TaskService, UserService
from .connection import close_record_store, init_record_store

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@taskhub.dev"
DEMO_PASSWORD = "password123"


async def seed() -> None:
    """Reset the collections and load a demo account with projects and tasks."""

    await init_record_store()
    try:
        for model in (Task, Project, User):
            await model.get_motor_collection().delete_many({})

        user = await UserService().create_user(name="Demo User", email=DEMO_EMAIL, password=DEMO_PASSWORD)
        if user.id is None:  # pragma: no cover - inserted documents always carry an id
            raise ValueError("Seed user was not persisted correctly")
        owner_id = user.id

        projects = ProjectService()
        work = await projects.create_project(owner_id=owner_id, name="Work", color="#3B82F6", is_favorite=True)
        personal = await projects.create_project(owner_id=owner_id, name="Personal", color="#10B981")
        shopping = await projects.create_project(owner_id=owner_id, name="Shopping", color="#F59E0B")

        now = utcnow()
        tasks = TaskService()
        await tasks.create_task(
            owner_id=owner_id,
            title="Prepare quarterly report",
            description="Collect the numbers and draft the summary slides.",
            priority=1,
            due_date=now + timedelta(days=2),
            project_id=str(work.project.id),
            tags=["reporting", "finance"],
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Review pull requests",
            priority=2,
            due_date=now + timedelta(days=1),
            project_id=str(work.project.id),
            tags=["code-review"],
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Update team wiki",
            description="Document the new deployment process.",
            priority=3,
            project_id=str(work.project.id),
            completed=True,
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Book dentist appointment",
            priority=2,
            due_date=now + timedelta(days=7),
            project_id=str(personal.project.id),
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Plan weekend hike",
            priority=4,
            project_id=str(personal.project.id),
            tags=["outdoors"],
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Buy groceries",
            description="Milk, eggs, bread, coffee.",
            priority=3,
            due_date=now,
            project_id=str(shopping.project.id),
            tags=["errands"],
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Call the bank",
            priority=2,
        )
        await tasks.create_task(
            owner_id=owner_id,
            title="Read a new book",
            description="Pick something from the reading list.",
            priority=4,
            tags=["leisure"],
            completed=True,
        )
        logger.info("Seed data loaded", extra={"email": DEMO_EMAIL})
    finally:
        await close_record_store()


def main() -> None:
    """Entry-point hook for ``python -m`` execution."""
    configure_logging(get_settings())
    asyncio.run(seed())


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    main()
