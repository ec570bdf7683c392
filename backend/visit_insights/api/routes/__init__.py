"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from visit_insights.config import AppSettings
from visit_insights.db.session import Database

from .sparklines import get_sparklines_router


def build_api_router(database: Database, settings: AppSettings | None = None) -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(get_sparklines_router(database, settings))
    return api_router


__all__ = ["build_api_router"]
