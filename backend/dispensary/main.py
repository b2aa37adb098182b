"""
FastAPI application entrypoint.

- Configures CORS.
- Registers standardized error handlers.
- Initializes structured logging.
- Includes infra routes (health/version) and aggregates API sub-routers.

Run locally:
  uvicorn dispensary.main:app --reload --port 8000 --app-dir backend
"""

from __future__ import annotations

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dispensary.api.router import router as api_router
from dispensary.core.config import Settings, get_settings
from dispensary.core.errors import register_exception_handlers
from dispensary.core.logging import get_logger, init_logging

log = get_logger(__name__)


def _create_infra_router(settings: Settings) -> APIRouter:
    """
    Non-business endpoints (health, version).
    """
    router = APIRouter(prefix="/api", tags=["infra"])

    @router.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @router.get("/version")
    def version() -> dict:
        return {"version": settings.app_version}

    return router


def get_application() -> FastAPI:
    """
    Construct the FastAPI app with CORS, logging, routers, and error handlers.
    """
    init_logging()
    settings = get_settings()

    app = FastAPI(title="Dispensary Catalog API", version=settings.app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(_create_infra_router(settings))
    app.include_router(api_router)

    register_exception_handlers(app)

    @app.get("/")
    def root() -> dict:
        return {"message": "Dispensary Catalog API", "health": "/api/health"}

    log.info("application configured", extra={"app_env": settings.app_env})
    return app


# ASGI application
app = get_application()
