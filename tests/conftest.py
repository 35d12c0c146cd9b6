from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from taskhub.app.core.config import get_settings
from taskhub.app.db import init_record_store, set_store_client
from taskhub.app.main import create_app


@dataclass(slots=True)
class RegisteredUser:
    id: str
    name: str
    email: str
    password: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


RegisterUser = Callable[..., Awaitable[RegisteredUser]]


@pytest.fixture(autouse=True)
def test_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TASKHUB_ENVIRONMENT", "test")
    monkeypatch.setenv("TASKHUB_JWT_SECRET_KEY", "test-secret")
    get_settings.cache_clear()
    try:
        yield get_settings()
    finally:
        get_settings.cache_clear()


@pytest_asyncio.fixture
async def record_store(test_settings) -> AsyncIterator[AsyncMongoMockClient]:
    client = AsyncMongoMockClient()
    await init_record_store(client=client, force=True)
    try:
        yield client
    finally:
        set_store_client(None)


@pytest_asyncio.fixture
async def app(record_store) -> FastAPI:
    return create_app()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def register_user(client: AsyncClient) -> RegisterUser:
    counter = count()

    async def _factory(
        *,
        name: str = "Test User",
        email: str | None = None,
        password: str = "secret123",
    ) -> RegisteredUser:
        actual_email = email or f"user-{next(counter)}@example.com"
        response = await client.post(
            "/api/auth/signup",
            json={"name": name, "email": actual_email, "password": password},
        )
        assert response.status_code == 201, response.text
        # Requests authenticate through explicit headers unless a test opts into the cookie.
        client.cookies.clear()
        body = response.json()
        return RegisteredUser(
            id=body["user"]["id"],
            name=name,
            email=actual_email,
            password=password,
            token=body["token"],
        )

    return _factory
