from __future__ import annotations

from pathlib import Path

import pytest

from visit_insights.core.errors import AccessDenied
from visit_insights.db.init import init_database
from visit_insights.db.session import Database
from visit_insights.models import Website
from visit_insights.services.sites import InMemorySiteRegistry, Site, load_site_registry


def test_resolve_known_site(sites):
    site = sites.resolve_site("2")

    assert site == Site(id=2, name="Tokyo blog", timezone="Asia/Tokyo", main_url="https://blog.example.jp")


@pytest.mark.parametrize("id_site", [99, "abc", None])
def test_unknown_site_is_denied(sites, id_site):
    with pytest.raises(AccessDenied, match="Website not initialized"):
        sites.resolve_site(id_site)


def test_allow_list_restricts_access():
    registry = InMemorySiteRegistry([Site(id=1, name="a"), Site(id=2, name="b")], allowed_ids=[2])

    assert registry.resolve_site(2).name == "b"
    with pytest.raises(AccessDenied):
        registry.resolve_site(1)


async def test_load_site_registry_from_database(tmp_path: Path):
    database = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'sites.db'}")
    await init_database(database)
    async with database.session() as session:
        session.add_all(
            [
                Website(idsite=1, name="Shop", main_url="https://shop.example.com", timezone="Europe/Paris"),
                Website(idsite=2, name="Blog", main_url="https://blog.example.com", timezone="UTC"),
            ]
        )
        await session.commit()

    async with database.session() as session:
        registry = await load_site_registry(session, allowed_ids=[1])

    assert len(registry) == 2
    assert registry.resolve_site(1).timezone == "Europe/Paris"
    with pytest.raises(AccessDenied):
        registry.resolve_site(2)
    await database.dispose()
