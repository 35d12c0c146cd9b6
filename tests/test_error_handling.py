from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI, status
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError

from taskhub.app.core.config import get_settings
from taskhub.app.core.logging import RequestContextFilter
from taskhub.app.errors import ApplicationError, UnclassifiedError
from taskhub.app.main import create_app


class ExamplePayload(BaseModel):
    name: str


@pytest.fixture()
def bare_app() -> FastAPI:
    return create_app()


def _client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    return AsyncClient(transport=transport, base_url="http://test")


async def test_application_error_response_schema(bare_app: FastAPI) -> None:
    @bare_app.get("/error/application")
    async def trigger_application_error() -> None:  # pragma: no cover - defined in test
        raise ApplicationError(
            "Example failure",
            code="example_error",
            status_code=status.HTTP_418_IM_A_TEAPOT,
            details={"foo": "bar"},
        )

    async with _client(bare_app) as client:
        response = await client.get("/error/application")

    assert response.status_code == status.HTTP_418_IM_A_TEAPOT
    request_id = response.headers["X-Request-ID"]
    assert response.json() == {
        "code": "example_error",
        "message": "Example failure",
        "details": {"foo": "bar", "request_id": request_id},
    }


async def test_validation_error_response_schema(bare_app: FastAPI) -> None:
    @bare_app.post("/error/validation")
    async def create_item(payload: ExamplePayload) -> None:  # pragma: no cover - defined in test
        return None

    async with _client(bare_app) as client:
        response = await client.post("/error/validation", json={})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    payload = response.json()
    assert payload["code"] == "validation_error"
    assert payload["message"] == "Validation failed."
    assert payload["details"]["errors"] == [
        {"field": "name", "message": "Field required", "type": "missing"}
    ]
    assert payload["details"]["request_id"] == response.headers["X-Request-ID"]


async def test_unknown_route_uses_envelope(bare_app: FastAPI) -> None:
    async with _client(bare_app) as client:
        response = await client.get("/error/not-found", headers={"X-Request-ID": "req-123"})

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.headers["X-Request-ID"] == "req-123"
    payload = response.json()
    assert payload["code"] == "not_found"
    assert payload["details"] == {"request_id": "req-123"}


async def test_duplicate_key_is_reported_as_conflict(bare_app: FastAPI) -> None:
    @bare_app.get("/error/duplicate")
    async def trigger_duplicate() -> None:  # pragma: no cover - defined in test
        raise DuplicateKeyError(
            "E11000 duplicate key error",
            code=11000,
            details={"keyPattern": {"email": 1}, "keyValue": {"email": "a@example.com"}},
        )

    async with _client(bare_app) as client:
        response = await client.get("/error/duplicate")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    payload = response.json()
    assert payload["code"] == "conflict"
    assert payload["details"]["field"] == "email"


async def test_unclassified_error_is_500(bare_app: FastAPI) -> None:
    @bare_app.get("/error/unclassified")
    async def trigger_unclassified() -> None:  # pragma: no cover - defined in test
        raise UnclassifiedError()

    async with _client(bare_app) as client:
        response = await client.get("/error/unclassified")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["code"] == "server_error"


async def test_unhandled_error_exposes_debug_outside_production(bare_app: FastAPI) -> None:
    @bare_app.get("/error/unhandled")
    async def trigger_unhandled_error() -> None:  # pragma: no cover - defined in test
        raise RuntimeError("Sensitive detail")

    async with _client(bare_app) as client:
        response = await client.get("/error/unhandled")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    payload = response.json()
    assert payload["message"] == "Internal server error."
    assert payload["details"]["debug"] == {"type": "RuntimeError", "error": "Sensitive detail"}


async def test_unhandled_error_hides_internal_details_in_production(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKHUB_ENVIRONMENT", "production")
    get_settings.cache_clear()
    app = create_app()

    @app.get("/error/unhandled")
    async def trigger_unhandled_error() -> None:  # pragma: no cover - defined in test
        raise RuntimeError("Sensitive detail")

    async with _client(app) as client:
        response = await client.get("/error/unhandled")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    request_id = response.headers["X-Request-ID"]
    assert response.json() == {
        "code": "server_error",
        "message": "Internal server error.",
        "details": {"request_id": request_id},
    }
    assert "Sensitive" not in response.text


class _InMemoryHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.INFO)
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


async def test_request_id_attached_to_logs(bare_app: FastAPI) -> None:
    logger = logging.getLogger("tests.error_handling")
    handler = _InMemoryHandler()
    handler.addFilter(RequestContextFilter())
    logger.addHandler(handler)
    original_level = logger.level
    logger.setLevel(logging.INFO)

    @bare_app.get("/log")
    async def emit_log() -> dict[str, str]:  # pragma: no cover - defined in test
        logger.info("Log entry")
        return {"status": "ok"}

    try:
        async with _client(bare_app) as client:
            response = await client.get("/log")
    finally:
        logger.removeHandler(handler)
        logger.setLevel(original_level)
        handler.close()

    request_id = response.headers["X-Request-ID"]
    matching = [record for record in handler.records if record.getMessage() == "Log entry"]
    assert matching
    assert getattr(matching[0], "request_id", None) == request_id
