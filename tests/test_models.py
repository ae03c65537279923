"""Tests for FuelEU Pydantic models.

Covers: validation bounds, computed status/kind fields, ORM loading.
"""

import math

import pytest
from pydantic import ValidationError
from uuid_extensions import uuid7

from src.db.tables import RouteRow
from src.models.banking import BankEntry
from src.models.common import BalanceStatus, utc_now
from src.models.compliance import ComplianceSnapshot
from src.models.route import Route


def _route(**overrides) -> dict:
    fields = {
        "route_id": "R001", "vessel_type": "Container", "fuel_type": "HFO",
        "year": 2024, "ghg_intensity": 91.0, "fuel_consumption_t": 5000.0,
        "distance_km": 12000.0, "total_emissions_t": 4500.0,
    }
    fields.update(overrides)
    return fields


class TestRoute:
    def test_valid_route(self) -> None:
        route = Route(**_route())
        assert route.is_baseline is False

    def test_negative_fuel_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Route(**_route(fuel_consumption_t=-1.0))

    def test_nan_intensity_rejected(self) -> None:
        with pytest.raises(ValidationError, match="NaN"):
            Route(**_route(ghg_intensity=math.nan))

    def test_year_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Route(**_route(year=1999))

    def test_from_orm_row(self) -> None:
        row = RouteRow(id=1, **_route(), is_baseline=True)
        route = Route.model_validate(row)
        assert route.route_id == "R001"
        assert route.is_baseline is True


class TestBalanceStatus:
    @pytest.mark.parametrize(
        ("cb", "expected"),
        [(1.0, BalanceStatus.SURPLUS), (-1.0, BalanceStatus.DEFICIT), (0.0, BalanceStatus.NEUTRAL)],
    )
    def test_of(self, cb: float, expected: BalanceStatus) -> None:
        assert BalanceStatus.of(cb) is expected


class TestComplianceSnapshot:
    def test_status_is_computed(self) -> None:
        snap = ComplianceSnapshot(
            snapshot_id=uuid7(), ship_id="R001", year=2024, cb_gco2eq=-5.0,
            energy_mj=10.0, target_gco2eq_per_mj=89.3368,
            actual_gco2eq_per_mj=91.0, created_at=utc_now(),
        )
        assert snap.status == BalanceStatus.DEFICIT
        assert snap.model_dump()["status"] == "DEFICIT"

    def test_negative_energy_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ComplianceSnapshot(
                snapshot_id=uuid7(), ship_id="R001", year=2024, cb_gco2eq=0.0,
                energy_mj=-1.0, target_gco2eq_per_mj=89.3368,
                actual_gco2eq_per_mj=89.3368, created_at=utc_now(),
            )


class TestBankEntry:
    def test_deposit_and_withdrawal_kind(self) -> None:
        common = {"entry_id": uuid7(), "ship_id": "R002", "year": 2024, "created_at": utc_now()}
        assert BankEntry(amount_gco2eq=10.0, **common).kind == "DEPOSIT"
        assert BankEntry(amount_gco2eq=-10.0, **common).kind == "WITHDRAWAL"
