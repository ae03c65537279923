"""Route comparison against the baseline route.

    percent_difference = ((candidate / baseline) - 1) * 100
    compliant          = candidate <= target

A zero baseline is rejected explicitly; IEEE division would silently
return inf/nan.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from src.engine.errors import InvalidBaseline, InvalidInput


class RouteIntensity(Protocol):
    route_id: str
    ghg_intensity: float


@dataclass(frozen=True)
class ComparisonOutcome:
    percent_difference: float
    compliant: bool


@dataclass(frozen=True)
class ComparisonRow:
    route_id: str
    ghg_intensity: float
    percent_difference: float
    compliant: bool


def compare(
    baseline_intensity: float,
    candidate_intensity: float,
    target: float,
) -> ComparisonOutcome:
    """Compare one intensity against the baseline and the target threshold.

    Raises:
        InvalidInput: Any argument is NaN or infinite.
        InvalidBaseline: baseline_intensity == 0.
    """
    for name, value in (
        ("baseline_intensity", baseline_intensity),
        ("candidate_intensity", candidate_intensity),
        ("target", target),
    ):
        if not math.isfinite(value):
            raise InvalidInput(f"{name} must be a finite number (received {value})")

    if baseline_intensity == 0:
        raise InvalidBaseline("Baseline intensity must be non-zero")

    percent_difference = ((candidate_intensity / baseline_intensity) - 1) * 100
    return ComparisonOutcome(
        percent_difference=percent_difference,
        compliant=candidate_intensity <= target,
    )


def compare_routes(
    baseline: RouteIntensity,
    routes: Iterable[RouteIntensity],
    target: float,
) -> list[ComparisonRow]:
    """Compare every route except the baseline itself, in input order."""
    rows: list[ComparisonRow] = []
    for route in routes:
        if route.route_id == baseline.route_id:
            continue
        outcome = compare(baseline.ghg_intensity, route.ghg_intensity, target)
        rows.append(
            ComparisonRow(
                route_id=route.route_id,
                ghg_intensity=route.ghg_intensity,
                percent_difference=outcome.percent_difference,
                compliant=outcome.compliant,
            )
        )
    return rows
