"""Visit dimensions computed while tracking requests are processed."""

from .dimensions import (
    DimensionRegistry,
    Segment,
    TrackedAction,
    TrackerRequest,
    VisitDimension,
    Visitor,
)
from .entry_page import EntryPageUrl

__all__ = [
    "DimensionRegistry",
    "EntryPageUrl",
    "Segment",
    "TrackedAction",
    "TrackerRequest",
    "VisitDimension",
    "Visitor",
]
