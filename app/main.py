from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.v1.router import router as api_v1_router
from app.config.logging import setup_logging
from app.config.settings import Settings, settings as default_settings
from app.core.middleware import register_middlewares
from app.db.init_db import init_db


def create_app(settings: Settings = default_settings, *, create_schema: bool = True) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware and the service error handlers.
    - Includes the versioned API router under settings.API_V1_STR.
    """
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Migrations own the schema in production
        if create_schema and not settings.is_production():
            init_db()
        yield

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
