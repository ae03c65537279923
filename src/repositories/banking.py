"""Banking ledger repository — ledger reader and writer.

The ledger is append-only: rows are inserted, never updated or deleted.
The banked sum is always recomputed with SUM() over the rows; it is never
stored.

lock() serializes read-validate-append per (ship_id, year).
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import BankEntryRow
from src.models.common import new_uuid7, utc_now
from src.repositories.locking import advisory_xact_lock


class BankEntryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def lock(self, ship_id: str, year: int) -> None:
        await advisory_xact_lock(self._session, f"bank:{ship_id}:{year}")

    async def create(self, *, ship_id: str, year: int, amount_gco2eq: float,
                     note: str | None = None) -> BankEntryRow:
        row = BankEntryRow(
            entry_id=new_uuid7(), ship_id=ship_id, year=year,
            amount_gco2eq=amount_gco2eq, note=note, created_at=utc_now(),
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def get_banked_sum(self, ship_id: str, year: int) -> float:
        result = await self._session.execute(
            select(func.coalesce(func.sum(BankEntryRow.amount_gco2eq), 0.0)).where(
                BankEntryRow.ship_id == ship_id,
                BankEntryRow.year == year,
            )
        )
        return float(result.scalar_one())

    async def get_banked_sums(self, year: int) -> dict[str, float]:
        """Banked sum per ship for one year."""
        result = await self._session.execute(
            select(BankEntryRow.ship_id, func.sum(BankEntryRow.amount_gco2eq))
            .where(BankEntryRow.year == year)
            .group_by(BankEntryRow.ship_id)
        )
        return {ship_id: float(total) for ship_id, total in result.all()}

    async def list_entries(self, ship_id: str, year: int) -> list[BankEntryRow]:
        """All entries of a ship/year, newest first."""
        result = await self._session.execute(
            select(BankEntryRow)
            .where(
                BankEntryRow.ship_id == ship_id,
                BankEntryRow.year == year,
            )
            .order_by(BankEntryRow.seq.desc())
        )
        return list(result.scalars().all())
