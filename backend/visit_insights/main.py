"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visit_insights import __version__
from visit_insights.api.routes import build_api_router
from visit_insights.config import AppSettings, get_settings
from visit_insights.core.logging import setup_logging
from visit_insights.core.telemetry import setup_telemetry
from visit_insights.db.init import init_database
from visit_insights.db.session import Database, get_database


@asynccontextmanager
async def _lifespan(app: FastAPI, database: Database):
    await init_database(database)
    yield


def create_app(database: Database | None = None, settings: AppSettings | None = None) -> FastAPI:
    """Build the application with its routes and dependencies."""

    app_settings = settings or get_settings()
    database_instance = database or get_database()

    app = FastAPI(
        title=app_settings.app_name,
        version=__version__,
        lifespan=lambda app: _lifespan(app, database_instance),
    )
    setup_telemetry(app, app_settings, engine=database_instance.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["traceparent", "tracestate", "x-request-id"],
    )

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {
            "status": "ok",
            "timestamp": datetime.now().isoformat(),
            "timezone": app_settings.timezone,
        }

    app.include_router(build_api_router(database_instance, app_settings))
    return app


def run() -> FastAPI:
    setup_logging()
    return create_app()


__all__ = ["create_app", "run"]
