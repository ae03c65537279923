"""Compliance snapshot repository — snapshot provider and writer.

Snapshots are append-only. The latest snapshot of a ship/year is the newest
row by created_at, with the time-sortable UUID v7 breaking ties.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import ShipComplianceRow
from src.models.common import new_uuid7, utc_now


class ComplianceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, ship_id: str, year: int, cb_gco2eq: float,
                     energy_mj: float, target_gco2eq_per_mj: float,
                     actual_gco2eq_per_mj: float,
                     route_id: str | None = None) -> ShipComplianceRow:
        row = ShipComplianceRow(
            snapshot_id=new_uuid7(), ship_id=ship_id, route_id=route_id,
            year=year, cb_gco2eq=cb_gco2eq, energy_mj=energy_mj,
            target_gco2eq_per_mj=target_gco2eq_per_mj,
            actual_gco2eq_per_mj=actual_gco2eq_per_mj,
            created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get_latest(self, ship_id: str, year: int) -> ShipComplianceRow | None:
        result = await self._session.execute(
            select(ShipComplianceRow)
            .where(
                ShipComplianceRow.ship_id == ship_id,
                ShipComplianceRow.year == year,
            )
            .order_by(
                ShipComplianceRow.created_at.desc(),
                ShipComplianceRow.snapshot_id.desc(),
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_latest_by_year(self, year: int) -> list[ShipComplianceRow]:
        """Latest snapshot of every ship with data for the year, ordered by ship_id."""
        result = await self._session.execute(
            select(ShipComplianceRow)
            .where(ShipComplianceRow.year == year)
            .order_by(
                ShipComplianceRow.ship_id,
                ShipComplianceRow.created_at.desc(),
                ShipComplianceRow.snapshot_id.desc(),
            )
        )
        latest: dict[str, ShipComplianceRow] = {}
        for row in result.scalars().all():
            latest.setdefault(row.ship_id, row)
        return list(latest.values())
