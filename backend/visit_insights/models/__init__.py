"""Database model exports."""

from .metrics import DailyMetric
from .site import Website
from .visit import Visit

__all__ = [
    "Website",
    "Visit",
    "DailyMetric",
]
