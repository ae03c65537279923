"""Pool repository — immutable pools with their allocated members."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import PoolMemberRow, PoolRow
from src.engine.pooling import PoolAllocation
from src.models.common import new_uuid7, utc_now


class PoolRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, year: int,
                     allocations: Sequence[PoolAllocation]) -> PoolRow:
        """Store a pool and its members in allocator output order."""
        row = PoolRow(
            pool_id=new_uuid7(),
            year=year,
            created_at=utc_now(),
            members=[
                PoolMemberRow(
                    position=position,
                    ship_id=a.ship_id,
                    cb_before=a.cb_before,
                    cb_after=a.cb_after,
                )
                for position, a in enumerate(allocations)
            ],
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, pool_id: UUID) -> PoolRow | None:
        return await self._session.get(PoolRow, pool_id)

    async def list_by_year(self, year: int) -> list[PoolRow]:
        result = await self._session.execute(
            select(PoolRow)
            .where(PoolRow.year == year)
            .order_by(PoolRow.created_at.desc(), PoolRow.pool_id.desc())
        )
        return list(result.scalars().all())
