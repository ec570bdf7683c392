"""Archived daily metric model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from visit_insights.db.base import Base


class DailyMetric(Base):
    __tablename__ = "daily_metric"
    __table_args__ = (
        UniqueConstraint("idsite", "date", "metric", name="uq_daily_metric_site_date_metric"),
        Index("ix_daily_metric_site_metric_date", "idsite", "metric", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    idsite: Mapped[int] = mapped_column(ForeignKey("site.idsite"))
    date: Mapped[date] = mapped_column(Date)
    metric: Mapped[str] = mapped_column(String(64))
    value: Mapped[float] = mapped_column(Numeric(18, 2))


__all__ = ["DailyMetric"]
