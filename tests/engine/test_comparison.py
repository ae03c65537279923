"""Tests for baseline route comparison."""

import math
from dataclasses import dataclass

import pytest

from src.engine.comparison import ComparisonOutcome, compare, compare_routes
from src.engine.errors import InvalidBaseline, InvalidInput

TARGET = 89.3368


@dataclass
class _Route:
    route_id: str
    ghg_intensity: float


class TestCompare:
    def test_cleaner_route_is_compliant(self) -> None:
        outcome = compare(91.0, 88.0, TARGET)
        assert outcome.percent_difference == pytest.approx(-3.2967, abs=1e-3)
        assert outcome.compliant is True

    def test_dirtier_route_is_not_compliant(self) -> None:
        outcome = compare(91.0, 93.5, TARGET)
        assert outcome.percent_difference == pytest.approx(2.7473, abs=1e-3)
        assert outcome.compliant is False

    def test_candidate_equal_to_target_is_compliant(self) -> None:
        assert compare(91.0, TARGET, TARGET).compliant is True

    def test_same_as_baseline_is_zero_difference(self) -> None:
        assert compare(91.0, 91.0, TARGET) == ComparisonOutcome(
            percent_difference=0.0, compliant=False,
        )

    def test_zero_baseline_rejected(self) -> None:
        with pytest.raises(InvalidBaseline):
            compare(0.0, 88.0, TARGET)

    @pytest.mark.parametrize(
        "args",
        [
            (math.nan, 88.0, TARGET),
            (91.0, math.nan, TARGET),
            (91.0, 88.0, math.nan),
            (math.inf, 88.0, TARGET),
            (91.0, 88.0, math.inf),
        ],
    )
    def test_non_finite_rejected(self, args: tuple[float, float, float]) -> None:
        with pytest.raises(InvalidInput):
            compare(*args)

    def test_idempotent(self) -> None:
        assert compare(91.0, 93.5, TARGET) == compare(91.0, 93.5, TARGET)


class TestCompareRoutes:
    def test_baseline_excluded_and_order_kept(self) -> None:
        baseline = _Route("R001", 91.0)
        routes = [
            _Route("R003", 93.5), baseline, _Route("R002", 88.0),
        ]
        rows = compare_routes(baseline, routes, TARGET)
        assert [r.route_id for r in rows] == ["R003", "R002"]
        assert rows[0].compliant is False
        assert rows[1].compliant is True
        assert rows[1].ghg_intensity == 88.0

    def test_only_baseline_gives_empty(self) -> None:
        baseline = _Route("R001", 91.0)
        assert compare_routes(baseline, [baseline], TARGET) == []
