"""Pydantic schemas for compliance snapshots and adjusted balances.

A snapshot records one CB computation for a ship/year. Snapshots are
append-only; the latest row for a ship/year is the one banking validates
against.
"""

from uuid import UUID

from pydantic import Field, computed_field

from src.models.common import BalanceStatus, ComplianceYear, FuelEUBase, UTCTimestamp


class ComplianceSnapshot(FuelEUBase):
    """Immutable CB snapshot for a ship/year."""

    snapshot_id: UUID
    ship_id: str
    route_id: str | None = None
    year: ComplianceYear
    cb_gco2eq: float
    energy_mj: float = Field(..., ge=0)
    target_gco2eq_per_mj: float
    actual_gco2eq_per_mj: float
    created_at: UTCTimestamp

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> BalanceStatus:
        return BalanceStatus.of(self.cb_gco2eq)


class AdjustedCB(FuelEUBase):
    """Latest CB of a ship after banking movements.

    cb_after = cb_before - banked: deposits leave the year's balance,
    applied withdrawals come back into it.
    """

    ship_id: str
    year: int
    cb_before: float
    banked: float
    cb_after: float
