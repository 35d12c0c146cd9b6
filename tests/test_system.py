from __future__ import annotations

import pytest
from httpx import AsyncClient

from taskhub.app.db import seed as seed_module
from taskhub.app.models import Project, Task, User
from taskhub.app.services import AuthService


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_metadata(client: AsyncClient) -> None:
    response = await client.get("/api/metadata")

    assert response.status_code == 200
    assert response.json() == {
        "name": "TaskHub",
        "environment": "test",
        "version": "0.1.0",
        "api_prefix": "/api",
    }


async def test_seed_loads_demo_account(record_store, test_settings, monkeypatch: pytest.MonkeyPatch) -> None:
    async def _keep_store_open() -> None:
        return None

    monkeypatch.setattr(seed_module, "close_record_store", _keep_store_open)

    await seed_module.seed()
    await seed_module.seed()

    assert await User.find_all().count() == 1
    user = await AuthService(test_settings).authenticate_user(seed_module.DEMO_EMAIL, seed_module.DEMO_PASSWORD)
    projects = await Project.find({"user_id": user.id}).to_list()
    assert sorted(project.name for project in projects) == ["Personal", "Shopping", "Work"]
    assert [project.name for project in projects if project.is_favorite] == ["Work"]
    tasks = await Task.find({"user_id": user.id}).to_list()
    assert len(tasks) == 8
    assert all((task.completed_at is not None) == task.completed for task in tasks)
    assert any(task.project_id is None for task in tasks)
