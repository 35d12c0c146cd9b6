"""Entry point for the TaskHub FastAPI application."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers import api_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import CorrelationIdMiddleware
from .db import close_record_store, init_record_store
from .deps import SettingsDependency
from .errors import register_exception_handlers
from .schemas.system import RootResponse


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings)

    router_prefix = settings.router_prefix
    openapi_url = f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Personal task management API with projects, filtering and pagination.",
        docs_url=f"{router_prefix}/docs",
        redoc_url=f"{router_prefix}/redoc",
        openapi_url=openapi_url,
    )

    application.state.settings = settings

    application.add_middleware(CorrelationIdMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    application.include_router(api_router, prefix=router_prefix)

    @application.get(
        f"{router_prefix}/metadata",
        response_model=RootResponse,
        tags=["system"],
        summary="Service metadata",
    )
    async def read_api_metadata(settings: SettingsDependency) -> RootResponse:
        """Expose minimal service metadata for API clients."""

        return RootResponse(
            name=settings.project_name,
            environment=settings.environment,
            version=settings.version,
            api_prefix=settings.router_prefix,
        )

    register_exception_handlers(application)

    @application.on_event("startup")
    async def _initialise_record_store() -> None:
        await init_record_store()

    @application.on_event("shutdown")
    async def _dispose_record_store() -> None:
        await close_record_store()

    return application


def run() -> None:
    """Convenience entry point for the ``taskhub`` console script."""

    settings: Settings = get_settings()
    uvicorn.run(
        "taskhub.app.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    run()
