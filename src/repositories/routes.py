"""Route register repository — route provider and baseline pointer.

Repos take AsyncSession, call add()/flush() only — never commit().
The baseline flag moves only through set_baseline(), which takes the baseline
lock, clears the previous holder and sets the new one inside the request
transaction. Concurrent callers queue on the lock instead of racing into the
single-baseline unique index.
"""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import RouteRow
from src.repositories.locking import advisory_xact_lock

BASELINE_LOCK_KEY = "routes:baseline"


class RouteRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, route_id: str, vessel_type: str, fuel_type: str,
                     year: int, ghg_intensity: float, fuel_consumption_t: float,
                     distance_km: float, total_emissions_t: float,
                     is_baseline: bool = False) -> RouteRow:
        row = RouteRow(
            route_id=route_id, vessel_type=vessel_type, fuel_type=fuel_type,
            year=year, ghg_intensity=ghg_intensity,
            fuel_consumption_t=fuel_consumption_t, distance_km=distance_km,
            total_emissions_t=total_emissions_t, is_baseline=is_baseline,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get_by_route_id(self, route_id: str) -> RouteRow | None:
        result = await self._session.execute(
            select(RouteRow).where(RouteRow.route_id == route_id)
        )
        return result.scalar_one_or_none()

    async def list_all(
        self,
        *,
        year: int | None = None,
        vessel_type: str | None = None,
        fuel_type: str | None = None,
    ) -> list[RouteRow]:
        stmt = select(RouteRow)
        if year is not None:
            stmt = stmt.where(RouteRow.year == year)
        if vessel_type is not None:
            stmt = stmt.where(RouteRow.vessel_type == vessel_type)
        if fuel_type is not None:
            stmt = stmt.where(RouteRow.fuel_type == fuel_type)
        result = await self._session.execute(stmt.order_by(RouteRow.id))
        return list(result.scalars().all())

    async def get_baseline(self) -> RouteRow | None:
        result = await self._session.execute(
            select(RouteRow).where(RouteRow.is_baseline.is_(True)).limit(1)
        )
        return result.scalar_one_or_none()

    async def lock_baseline(self) -> None:
        await advisory_xact_lock(self._session, BASELINE_LOCK_KEY)

    async def set_baseline(self, route_id: str) -> RouteRow | None:
        """Make route_id the only baseline. Returns None if the route is unknown."""
        await self.lock_baseline()
        row = await self.get_by_route_id(route_id)
        if row is None:
            return None

        await self._session.execute(
            update(RouteRow)
            .where(RouteRow.is_baseline.is_(True), RouteRow.route_id != route_id)
            .values(is_baseline=False)
        )
        row.is_baseline = True
        await self._session.flush()
        return row
