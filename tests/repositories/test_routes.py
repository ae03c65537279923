"""Tests for RouteRepository and the single-baseline pointer."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import RouteRow
from src.repositories.routes import RouteRepository


def _route(route_id: str, **overrides) -> dict:
    fields = {
        "route_id": route_id, "vessel_type": "Container", "fuel_type": "HFO",
        "year": 2024, "ghg_intensity": 91.0, "fuel_consumption_t": 5000.0,
        "distance_km": 12000.0, "total_emissions_t": 4500.0,
    }
    fields.update(overrides)
    return fields


class TestRouteRepository:
    """Register reads and filters."""

    async def test_create_and_get(self, db_session: AsyncSession) -> None:
        repo = RouteRepository(db_session)
        row = await repo.create(**_route("R100"))
        assert row.id is not None
        assert row.is_baseline is False

        fetched = await repo.get_by_route_id("R100")
        assert fetched is not None
        assert fetched.ghg_intensity == 91.0

    async def test_get_nonexistent(self, db_session: AsyncSession) -> None:
        assert await RouteRepository(db_session).get_by_route_id("NOPE") is None

    async def test_list_all_in_insertion_order(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        rows = await RouteRepository(db_session).list_all()
        assert [r.route_id for r in rows] == ["R001", "R002", "R003", "R004", "R005"]

    async def test_list_filters(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        repo = RouteRepository(db_session)
        assert [r.route_id for r in await repo.list_all(year=2025)] == ["R004", "R005"]
        assert [r.route_id for r in await repo.list_all(fuel_type="LNG")] == ["R002", "R005"]
        assert [
            r.route_id
            for r in await repo.list_all(vessel_type="Container", year=2024)
        ] == ["R001"]
        assert await repo.list_all(year=2030) == []


class TestBaselinePointer:
    """At most one route holds the baseline flag."""

    async def test_seeded_baseline(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        baseline = await RouteRepository(db_session).get_baseline()
        assert baseline is not None
        assert baseline.route_id == "R001"

    async def test_no_baseline(self, db_session: AsyncSession) -> None:
        assert await RouteRepository(db_session).get_baseline() is None

    async def test_set_baseline_moves_flag(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        repo = RouteRepository(db_session)
        row = await repo.set_baseline("R003")
        assert row is not None
        assert row.is_baseline is True

        db_session.expire_all()
        flagged = [r.route_id for r in await repo.list_all() if r.is_baseline]
        assert flagged == ["R003"]

    async def test_set_baseline_twice_is_idempotent(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        repo = RouteRepository(db_session)
        await repo.set_baseline("R002")
        await repo.set_baseline("R002")
        db_session.expire_all()
        flagged = [r.route_id for r in await repo.list_all() if r.is_baseline]
        assert flagged == ["R002"]

    async def test_set_unknown_baseline_leaves_pointer(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        repo = RouteRepository(db_session)
        assert await repo.set_baseline("R999") is None
        baseline = await repo.get_baseline()
        assert baseline is not None
        assert baseline.route_id == "R001"

    async def test_second_flag_rejected_by_index(
        self, db_session: AsyncSession, seeded_routes: list[RouteRow],
    ) -> None:
        repo = RouteRepository(db_session)
        with pytest.raises(IntegrityError):
            await repo.create(**_route("R200", is_baseline=True))
