"""Visit log model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from visit_insights.db.base import Base
from visit_insights.db.types import UnsignedInteger


class Visit(Base):
    __tablename__ = "visit"
    __table_args__ = (Index("ix_visit_site_time", "idsite", "visit_first_action_time"),)

    idvisit: Mapped[int] = mapped_column(primary_key=True)
    idsite: Mapped[int] = mapped_column(ForeignKey("site.idsite"))
    visit_first_action_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    visit_entry_idaction_url: Mapped[int | None] = mapped_column(UnsignedInteger, nullable=True, default=None)
    visit_exit_idaction_url: Mapped[int | None] = mapped_column(UnsignedInteger, nullable=True, default=None)


__all__ = ["Visit"]
