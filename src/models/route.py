"""Pydantic schemas for the route register.

A route is one ship's voyage profile for a reporting year. Exactly zero or
one route carries the baseline flag at any time; the flag only moves through
RouteRepository.set_baseline.
"""

import math

from pydantic import Field, field_validator

from src.models.common import ComplianceYear, FuelEUBase


class Route(FuelEUBase):
    """A voyage profile with fuel consumption and emissions."""

    route_id: str = Field(..., min_length=1, max_length=50)
    vessel_type: str = Field(..., min_length=1, max_length=100)
    fuel_type: str = Field(..., min_length=1, max_length=50)
    year: ComplianceYear
    ghg_intensity: float = Field(..., description="Actual GHG intensity (gCO2e/MJ).")
    fuel_consumption_t: float = Field(..., ge=0, description="Fuel consumed (t).")
    distance_km: float = Field(..., ge=0)
    total_emissions_t: float = Field(..., ge=0)
    is_baseline: bool = False

    @field_validator("ghg_intensity")
    @classmethod
    def _intensity_not_nan(cls, v: float) -> float:
        if math.isnan(v):
            raise ValueError("ghg_intensity must not be NaN")
        return v


class RouteComparison(FuelEUBase):
    """One route ranked against the baseline."""

    route_id: str
    vessel_type: str
    fuel_type: str
    year: int
    ghg_intensity: float
    percent_difference: float
    compliant: bool


class ComparisonReport(FuelEUBase):
    """Baseline route plus every other route compared against it."""

    baseline: Route
    target: float
    comparisons: list[RouteComparison] = Field(default_factory=list)
