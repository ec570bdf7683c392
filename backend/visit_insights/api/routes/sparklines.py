"""Dashboard sparkline endpoints."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from visit_insights.config import AppSettings, get_settings
from visit_insights.core.context import RequestContext
from visit_insights.core.errors import AccessDenied, InvalidArgument
from visit_insights.core.telemetry import get_tracer
from visit_insights.core.translations import translate
from visit_insights.db.session import Database
from visit_insights.models import DailyMetric
from visit_insights.schemas import SparklineEntrySchema, SparklineSetResponse
from visit_insights.services.periods import period_bounds, previous_period, resolve_end_date
from visit_insights.services.sites import load_site_registry
from visit_insights.services.sparklines import SparklineSetBuilder

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

EVOLUTION_GRAPH_PARAMS = {"module": "VisitsSummary", "action": "getEvolutionGraph"}


def _plain_number(value: Decimal | None) -> int | float:
    if value is None:
        return 0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


async def _metric_totals(
    session: AsyncSession,
    id_site: int,
    metrics: list[str],
    start: date,
    end: date,
) -> dict[str, int | float]:
    stmt = (
        select(DailyMetric.metric, func.sum(DailyMetric.value))
        .where(
            DailyMetric.idsite == id_site,
            DailyMetric.metric.in_(metrics),
            DailyMetric.date >= start,
            DailyMetric.date <= end,
        )
        .group_by(DailyMetric.metric)
    )
    rows = (await session.execute(stmt)).all()
    totals = {metric: _plain_number(Decimal(str(total)) if total is not None else None) for metric, total in rows}
    return {metric: totals.get(metric, 0) for metric in metrics}


def _tooltip(label: str, current: Any, past: Any, current_range: tuple[date, date], past_range: tuple[date, date]) -> str:
    def _describe(bounds: tuple[date, date]) -> str:
        start, end = bounds
        return start.isoformat() if start == end else f"{start.isoformat()} - {end.isoformat()}"

    return translate("General_EvolutionTooltip") % {
        "current": current,
        "past": past,
        "label": label.lower(),
        "current_period": _describe(current_range),
        "past_period": _describe(past_range),
    }


def get_sparklines_router(database: Database, settings: AppSettings | None = None) -> APIRouter:
    router = APIRouter(prefix="/sparklines", tags=["sparklines"])
    app_settings = settings or get_settings()

    @router.get("/visits-overview", response_model=SparklineSetResponse)
    async def visits_overview(
        request: Request,
        id_site: int = Query(..., alias="idSite"),
        period: str = Query(default="day"),
        date_param: str = Query(default="yesterday", alias="date"),
        session: AsyncSession = Depends(database.get_session),
    ) -> SparklineSetResponse:
        """Build the visits overview sparklines with evolution against the previous period."""

        metrics = list(app_settings.overview_metrics)
        with tracer.start_as_current_span("sparklines.visits_overview") as span:
            span.set_attribute("visit_insights.id_site", id_site)
            span.set_attribute("visit_insights.period", period)
            span.set_attribute("visit_insights.date", date_param)
            try:
                sites = await load_site_registry(session)
                site = sites.resolve_site(id_site)
                end = resolve_end_date(date_param, site.timezone)
                current_range = period_bounds(period, end)
                past_range = previous_period(period, end)

                current = await _metric_totals(session, site.id, metrics, *current_range)
                past = await _metric_totals(session, site.id, metrics, *past_range)

                builder = SparklineSetBuilder(
                    RequestContext.from_query_string(request.url.query),
                    sites,
                    settings=app_settings,
                )
                # Query defaults are not part of request.url.query.
                resolved = {"idSite": site.id, "period": period, "date": date_param}
                for metric in metrics:
                    builder.add_metric(metric)
                    label = builder.translate_metric(metric)
                    builder.add_entry(
                        {**EVOLUTION_GRAPH_PARAMS, **resolved, "columns": [metric]},
                        current[metric],
                        f"%s {label.lower()}",
                        {
                            "currentValue": current[metric],
                            "pastValue": past[metric],
                            "tooltip": _tooltip(label, current[metric], past[metric], current_range, past_range),
                        },
                    )
                if len(metrics) % 2:
                    builder.add_placeholder()
                span.set_attribute("visit_insights.entries", len(builder.get_sorted_entries()))
            except AccessDenied as exc:
                logger.warning("Sparklines denied for site %s: %s", id_site, exc)
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
            except InvalidArgument as exc:
                logger.warning("Invalid sparkline request for site %s: %s", id_site, exc)
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

        return SparklineSetResponse(
            id_site=site.id,
            period=period,
            start_date=current_range[0],
            end_date=current_range[1],
            entries=[SparklineEntrySchema.from_entry(entry) for entry in builder.get_sorted_entries()],
        )

    return router


__all__ = ["get_sparklines_router"]
