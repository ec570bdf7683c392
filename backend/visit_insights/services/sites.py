"""Website lookup with access checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from visit_insights.core.errors import AccessDenied
from visit_insights.models import Website

logger = logging.getLogger(__name__)

NO_ACCESS_MESSAGE = (
    "Website not initialized, check that you are logged in and/or using the correct token_auth."
)


@dataclass(frozen=True)
class Site:
    id: int
    name: str
    timezone: str = "UTC"
    main_url: str = ""


class SiteResolver(Protocol):
    """Resolves a website id for the current user."""

    def resolve_site(self, id_site: Any) -> Site:
        ...


class InMemorySiteRegistry:
    """Sites visible to one request, optionally narrowed to an allow-list."""

    def __init__(self, sites: Iterable[Site] = (), *, allowed_ids: Iterable[int] | None = None):
        self._sites: dict[int, Site] = {site.id: site for site in sites}
        self._allowed: set[int] | None = set(allowed_ids) if allowed_ids is not None else None

    def __len__(self) -> int:
        return len(self._sites)

    def resolve_site(self, id_site: Any) -> Site:
        try:
            key = int(id_site)
        except (TypeError, ValueError) as exc:
            raise AccessDenied(NO_ACCESS_MESSAGE) from exc
        site = self._sites.get(key)
        if site is None or (self._allowed is not None and key not in self._allowed):
            logger.warning("Denied access to website %s", id_site)
            raise AccessDenied(NO_ACCESS_MESSAGE)
        return site


async def load_site_registry(
    session: AsyncSession,
    *,
    allowed_ids: Iterable[int] | None = None,
) -> InMemorySiteRegistry:
    """Load every stored website into a registry for the current request."""

    rows = (await session.execute(select(Website).order_by(Website.idsite))).scalars().all()
    sites = [Site(id=row.idsite, name=row.name, timezone=row.timezone, main_url=row.main_url) for row in rows]
    return InMemorySiteRegistry(sites, allowed_ids=allowed_ids)


__all__ = [
    "Site",
    "SiteResolver",
    "InMemorySiteRegistry",
    "load_site_registry",
    "NO_ACCESS_MESSAGE",
]
