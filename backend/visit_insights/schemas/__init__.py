"""Pydantic schema exports."""

from .sparklines import (
    EvolutionSchema,
    MetricDisplaySchema,
    SparklineEntrySchema,
    SparklineSetResponse,
)

__all__ = [
    "EvolutionSchema",
    "MetricDisplaySchema",
    "SparklineEntrySchema",
    "SparklineSetResponse",
]
