"""Carbon balance calculator — FuelEU compliance arithmetic.

    energy_mj = fuel_consumption_t * 41_000
    cb_gco2eq = (target - actual) * energy_mj

Positive CB is a surplus (ship below target intensity), negative a deficit.
Plain IEEE double arithmetic; no rounding (presentation concern).
Pure deterministic — no I/O, no hidden state.
"""

import math
from dataclasses import dataclass

from src.engine.errors import InvalidInput

# Lower calorific value used for every fuel, MJ per tonne.
ENERGY_CONVERSION_MJ_PER_T = 41_000

# FuelEU 2025 target: 2% below the 91.16 gCO2e/MJ reference.
DEFAULT_TARGET_INTENSITY = 89.3368


@dataclass(frozen=True)
class CBResult:
    """Engine-level CB computation result."""

    cb_gco2eq: float
    energy_mj: float

    @property
    def is_surplus(self) -> bool:
        return self.cb_gco2eq > 0


def compute_energy(fuel_consumption_t: float) -> float:
    """Convert fuel consumption (t) to energy (MJ)."""
    if not math.isfinite(fuel_consumption_t) or fuel_consumption_t < 0:
        raise InvalidInput(
            f"fuel_consumption_t must be non-negative and finite (received {fuel_consumption_t})"
        )
    return fuel_consumption_t * ENERGY_CONVERSION_MJ_PER_T


def compute_cb(target: float, actual: float, fuel_consumption_t: float) -> CBResult:
    """Compute carbon balance and energy for one ship.

    Args:
        target: Target GHG intensity (gCO2e/MJ).
        actual: Actual GHG intensity (gCO2e/MJ).
        fuel_consumption_t: Fuel consumed, tonnes (>= 0).

    Returns:
        CBResult with cb_gco2eq and energy_mj.

    Raises:
        InvalidInput: If target/actual is NaN or infinite, or fuel consumption
            is negative or infinite.
    """
    if not math.isfinite(target):
        raise InvalidInput(f"target must be a finite number (received {target})")
    if not math.isfinite(actual):
        raise InvalidInput(f"actual must be a finite number (received {actual})")

    energy_mj = compute_energy(fuel_consumption_t)
    cb_gco2eq = (target - actual) * energy_mj
    return CBResult(cb_gco2eq=cb_gco2eq, energy_mj=energy_mj)
