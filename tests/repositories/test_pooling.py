"""Tests for PoolRepository."""

from sqlalchemy.ext.asyncio import AsyncSession
from uuid_extensions import uuid7

from src.engine.pooling import PoolAllocation
from src.repositories.pooling import PoolRepository

ALLOCATIONS = [
    PoolAllocation(ship_id="R001", cb_before=800.0, cb_after=0.0),
    PoolAllocation(ship_id="R002", cb_before=700.0, cb_after=500.0),
    PoolAllocation(ship_id="R004", cb_before=-400.0, cb_after=0.0),
    PoolAllocation(ship_id="R003", cb_before=-600.0, cb_after=0.0),
]


class TestPoolRepository:
    async def test_create_and_get_keeps_member_order(self, db_session: AsyncSession) -> None:
        repo = PoolRepository(db_session)
        row = await repo.create(year=2024, allocations=ALLOCATIONS)

        fetched = await repo.get(row.pool_id)
        assert fetched is not None
        assert fetched.year == 2024
        assert [m.ship_id for m in fetched.members] == ["R001", "R002", "R004", "R003"]
        assert [m.position for m in fetched.members] == [0, 1, 2, 3]
        assert fetched.members[1].cb_after == 500.0

    async def test_get_nonexistent(self, db_session: AsyncSession) -> None:
        assert await PoolRepository(db_session).get(uuid7()) is None

    async def test_list_by_year(self, db_session: AsyncSession) -> None:
        repo = PoolRepository(db_session)
        row = await repo.create(year=2024, allocations=ALLOCATIONS[:1])
        await repo.create(year=2025, allocations=ALLOCATIONS[:1])

        pools = await repo.list_by_year(2024)
        assert [p.pool_id for p in pools] == [row.pool_id]
