"""Pydantic schemas for the banking ledger.

Positive amount = deposit (banked surplus), negative = withdrawal (applied).
The banked balance of a ship/year is always the sum of its entries.
"""

from uuid import UUID

from pydantic import computed_field

from src.models.common import FuelEUBase, UTCTimestamp


class BankEntry(FuelEUBase):
    """One append-only ledger row."""

    entry_id: UUID
    ship_id: str
    year: int
    amount_gco2eq: float
    note: str | None = None
    created_at: UTCTimestamp

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kind(self) -> str:
        return "DEPOSIT" if self.amount_gco2eq > 0 else "WITHDRAWAL"


class BankLedger(FuelEUBase):
    """Ledger history of a ship/year plus its derived banked sum."""

    ship_id: str
    year: int
    banked_sum: float
    entries: list[BankEntry]
