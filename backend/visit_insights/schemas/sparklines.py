"""Pydantic schemas for dashboard sparklines."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from visit_insights.services.evolution import format_evolution
from visit_insights.services.sparklines import SparklineEntry


class MetricDisplaySchema(BaseModel):
    column: str = Field(..., examples=["nb_visits"])
    value: float | int | str
    description: str = Field(..., examples=["%s visits"])


class EvolutionSchema(BaseModel):
    percent: float
    display: str = Field(..., examples=["+12.5%"])
    tooltip: str | None = None


class SparklineEntrySchema(BaseModel):
    order: int
    url: str
    metrics: list[MetricDisplaySchema]
    evolution: EvolutionSchema | None = None
    is_placeholder: bool

    @classmethod
    def from_entry(cls, entry: SparklineEntry) -> "SparklineEntrySchema":
        evolution = None
        if entry.evolution is not None:
            evolution = EvolutionSchema(
                percent=entry.evolution.percent,
                display=format_evolution(entry.evolution.percent),
                tooltip=entry.evolution.tooltip,
            )
        return cls(
            order=entry.order,
            url=entry.url,
            metrics=[
                MetricDisplaySchema(column=m.column, value=m.value, description=m.description)
                for m in entry.metrics
            ],
            evolution=evolution,
            is_placeholder=entry.is_placeholder,
        )


class SparklineSetResponse(BaseModel):
    id_site: int
    period: str
    start_date: date
    end_date: date
    entries: list[SparklineEntrySchema]

    class Config:
        json_schema_extra = {
            "example": {
                "id_site": 1,
                "period": "day",
                "start_date": "2015-07-26",
                "end_date": "2015-07-26",
                "entries": [
                    {
                        "order": 1000,
                        "url": "?module=VisitsSummary&idSite=1&period=day&date=2015-06-27,2015-07-26"
                        "&viewDataTable=sparkline&columns=nb_visits",
                        "metrics": [{"column": "nb_visits", "value": 120, "description": "%s visits"}],
                        "evolution": {"percent": 20.0, "display": "+20%", "tooltip": None},
                        "is_placeholder": False,
                    }
                ],
            }
        }


__all__ = [
    "MetricDisplaySchema",
    "EvolutionSchema",
    "SparklineEntrySchema",
    "SparklineSetResponse",
]
