from __future__ import annotations

from httpx import AsyncClient

from taskhub.app.models import Task


async def _create_project(client: AsyncClient, headers: dict[str, str], **payload) -> dict:
    response = await client.post("/api/projects", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["project"]


async def _create_task(client: AsyncClient, headers: dict[str, str], **payload) -> dict:
    response = await client.post("/api/tasks", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


async def test_create_project_applies_defaults(client: AsyncClient, register_user) -> None:
    user = await register_user()

    response = await client.post("/api/projects", json={"name": "  Work  "}, headers=user.headers)

    assert response.status_code == 201
    body = response.json()
    assert body["message"]
    project = body["project"]
    assert project["name"] == "Work"
    assert project["color"] == "#808080"
    assert project["isFavorite"] is False
    assert project["taskCount"] == 0
    assert project["userId"] == user.id


async def test_create_project_rejects_bad_input(client: AsyncClient, register_user) -> None:
    user = await register_user()

    bad_color = await client.post("/api/projects", json={"name": "Work", "color": "red"}, headers=user.headers)
    blank_name = await client.post("/api/projects", json={"name": "   "}, headers=user.headers)

    assert bad_color.status_code == 400
    assert bad_color.json()["details"]["errors"][0]["field"] == "color"
    assert blank_name.status_code == 400
    assert blank_name.json()["details"]["errors"][0]["field"] == "name"


async def test_list_projects_favourites_first_then_newest(client: AsyncClient, register_user) -> None:
    user = await register_user()
    other = await register_user()
    first = await _create_project(client, user.headers, name="First")
    favourite = await _create_project(client, user.headers, name="Favourite", isFavorite=True)
    third = await _create_project(client, user.headers, name="Third")
    await _create_project(client, other.headers, name="Not mine", isFavorite=True)

    response = await client.get("/api/projects", headers=user.headers)

    assert response.status_code == 200
    ids = [project["id"] for project in response.json()["projects"]]
    assert ids == [favourite["id"], third["id"], first["id"]]


async def test_task_count_reflects_referencing_tasks(client: AsyncClient, register_user) -> None:
    user = await register_user()
    project = await _create_project(client, user.headers, name="Work")
    await _create_task(client, user.headers, title="One", projectId=project["id"])
    await _create_task(client, user.headers, title="Two", projectId=project["id"])
    await _create_task(client, user.headers, title="Loose")

    detail = await client.get(f"/api/projects/{project['id']}", headers=user.headers)
    listing = await client.get("/api/projects", headers=user.headers)

    assert detail.json()["project"]["taskCount"] == 2
    assert listing.json()["projects"][0]["taskCount"] == 2


async def test_update_project_is_partial(client: AsyncClient, register_user) -> None:
    user = await register_user()
    project = await _create_project(client, user.headers, name="Work", color="#112233")

    response = await client.put(
        f"/api/projects/{project['id']}",
        json={"isFavorite": True},
        headers=user.headers,
    )

    assert response.status_code == 200
    updated = response.json()["project"]
    assert updated["isFavorite"] is True
    assert updated["name"] == "Work"
    assert updated["color"] == "#112233"

    null_name = await client.put(f"/api/projects/{project['id']}", json={"name": None}, headers=user.headers)
    assert null_name.status_code == 400
    assert null_name.json()["code"] == "validation_error"


async def test_foreign_and_malformed_ids_are_not_found(client: AsyncClient, register_user) -> None:
    owner = await register_user()
    intruder = await register_user()
    project = await _create_project(client, owner.headers, name="Private")
    url = f"/api/projects/{project['id']}"

    responses = [
        await client.get(url, headers=intruder.headers),
        await client.put(url, json={"name": "Mine now"}, headers=intruder.headers),
        await client.delete(url, headers=intruder.headers),
        await client.get("/api/projects/not-an-id", headers=owner.headers),
    ]

    assert [response.status_code for response in responses] == [404, 404, 404, 404]
    assert {response.json()["code"] for response in responses} == {"not_found"}
    still_there = await client.get(url, headers=owner.headers)
    assert still_there.json()["project"]["name"] == "Private"


async def test_delete_project_detaches_tasks_by_default(client: AsyncClient, register_user) -> None:
    user = await register_user()
    project = await _create_project(client, user.headers, name="Work")
    task = await _create_task(client, user.headers, title="Keep me", projectId=project["id"])

    response = await client.delete(f"/api/projects/{project['id']}", headers=user.headers)

    assert response.status_code == 204
    assert response.content == b""
    detail = await client.get(f"/api/tasks/{task['id']}", headers=user.headers)
    assert detail.status_code == 200
    assert detail.json()["task"]["projectId"] is None
    assert detail.json()["task"]["project"] is None
    gone = await client.get(f"/api/projects/{project['id']}", headers=user.headers)
    assert gone.status_code == 404


async def test_delete_project_with_delete_tasks(client: AsyncClient, register_user) -> None:
    user = await register_user()
    project = await _create_project(client, user.headers, name="Work")
    other_project = await _create_project(client, user.headers, name="Home")
    for title in ("A", "B"):
        await _create_task(client, user.headers, title=title, projectId=project["id"])
    survivor = await _create_task(client, user.headers, title="C", projectId=other_project["id"])

    response = await client.delete(
        f"/api/projects/{project['id']}",
        params={"deleteTasks": "true"},
        headers=user.headers,
    )

    assert response.status_code == 204
    remaining = await Task.find_all().to_list()
    assert [str(task.id) for task in remaining] == [survivor["id"]]
