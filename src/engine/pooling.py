"""Greedy pool allocator — FuelEU Article 21 pooling.

Redistributes surplus CB to deficit members of a pool:

1. Reject empty pools and pools whose total CB is negative.
2. Split members into surplus (cb_before >= 0) and deficit (cb_before < 0);
   order each group by cb_before descending (stable, ties keep input order).
3. Walk one cursor over each group, transferring min(available, need)
   from the current surplus member to the current deficit member and
   advancing whichever member is exhausted (both when exactly matched).
4. Stop when either group is exhausted. Leftover surplus stays where it is.

Invariants (asserted after every allocation):
- conservation: sum(cb_after) == sum(cb_before) within tolerance
- surplus members never exit negative
- deficit members never exit worse than they entered

Because the total is >= 0, the walk always zeroes every deficit before the
surplus group runs out. Pure deterministic — NumPy only for the totals.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from src.engine.errors import (
    EmptyPool,
    InvalidInput,
    NegativePoolSum,
    PoolInvariantViolation,
)

logger = logging.getLogger(__name__)

# Absolute tolerance (gCO2e) for the conservation check.
DEFAULT_CONSERVATION_TOL = 1e-6


@dataclass(frozen=True)
class PoolMemberInput:
    """A pool member before allocation."""

    ship_id: str
    cb_before: float


@dataclass(frozen=True)
class PoolAllocation:
    """A pool member after allocation."""

    ship_id: str
    cb_before: float
    cb_after: float

    @property
    def is_surplus(self) -> bool:
        return self.cb_before >= 0

    @property
    def delta(self) -> float:
        return self.cb_after - self.cb_before


@dataclass(frozen=True)
class PoolSummary:
    """Aggregate view of one allocation."""

    member_count: int
    surplus_count: int
    deficit_count: int
    total_before: float
    total_after: float
    transferred: float
    leftover_surplus: float


class PoolAllocator:
    """Greedy two-cursor allocator over pre-sorted member indices."""

    def __init__(self, conservation_tol: float = DEFAULT_CONSERVATION_TOL) -> None:
        self._conservation_tol = conservation_tol

    def allocate(self, members: Sequence[PoolMemberInput]) -> list[PoolAllocation]:
        """Compute cb_after for every member.

        Args:
            members: Pool members with their pre-pool CB. Not mutated.

        Returns:
            One PoolAllocation per member, ordered by cb_before descending
            (surplus group first, then deficit group).

        Raises:
            EmptyPool: No members.
            InvalidInput: A cb_before is NaN or infinite.
            NegativePoolSum: sum(cb_before) < 0.
            PoolInvariantViolation: A post-condition failed.
        """
        if not members:
            raise EmptyPool("Pool must have at least one member")

        for member in members:
            if not math.isfinite(member.cb_before):
                raise InvalidInput(
                    f"cb_before for ship {member.ship_id} must be finite "
                    f"(received {member.cb_before})"
                )

        total_before = math.fsum(m.cb_before for m in members)
        if total_before < 0:
            raise NegativePoolSum(
                f"Pool validation failed: sum of cb_before ({total_before}) must be >= 0"
            )

        # Arena of running balances, addressed by input position.
        balances = [m.cb_before for m in members]

        surplus = sorted(
            (i for i, m in enumerate(members) if m.cb_before >= 0),
            key=lambda i: members[i].cb_before,
            reverse=True,
        )
        deficit = sorted(
            (i for i, m in enumerate(members) if m.cb_before < 0),
            key=lambda i: members[i].cb_before,
            reverse=True,
        )

        s_idx = 0
        d_idx = 0
        while s_idx < len(surplus) and d_idx < len(deficit):
            s = surplus[s_idx]
            d = deficit[d_idx]

            available = balances[s]
            need = max(-balances[d], 0.0)

            if available <= 0:
                s_idx += 1
                continue
            if need <= 0:
                d_idx += 1
                continue

            transfer = min(available, need)
            balances[s] -= transfer
            balances[d] += transfer
            logger.debug(
                "pool transfer %s -> %s: %s", members[s].ship_id, members[d].ship_id, transfer,
            )

            if balances[d] >= 0:
                d_idx += 1
            if balances[s] <= 0:
                s_idx += 1

        allocations = [
            PoolAllocation(
                ship_id=members[i].ship_id,
                cb_before=members[i].cb_before,
                cb_after=balances[i],
            )
            for i in surplus + deficit
        ]
        self._check_invariants(allocations, total_before)
        return allocations

    def _check_invariants(
        self, allocations: list[PoolAllocation], total_before: float,
    ) -> None:
        for a in allocations:
            if a.is_surplus and a.cb_after < 0:
                raise PoolInvariantViolation(
                    f"Surplus ship {a.ship_id} cannot exit negative (cb_after: {a.cb_after})"
                )
            if not a.is_surplus and a.cb_after < a.cb_before:
                raise PoolInvariantViolation(
                    f"Deficit ship {a.ship_id} cannot exit worse "
                    f"(cb_before: {a.cb_before}, cb_after: {a.cb_after})"
                )

        total_after = math.fsum(a.cb_after for a in allocations)
        if not np.isclose(total_after, total_before, rtol=1e-12, atol=self._conservation_tol):
            raise PoolInvariantViolation(
                f"CB not conserved: before={total_before}, after={total_after}"
            )


def pool_summary(allocations: Sequence[PoolAllocation]) -> PoolSummary:
    """Summarize an allocation: totals, group sizes, CB moved and left over."""
    before = np.array([a.cb_before for a in allocations], dtype=np.float64)
    after = np.array([a.cb_after for a in allocations], dtype=np.float64)
    surplus_mask = before >= 0

    transferred = float(np.sum(before[surplus_mask] - after[surplus_mask]))
    leftover = float(np.sum(after[surplus_mask]))

    return PoolSummary(
        member_count=len(allocations),
        surplus_count=int(np.count_nonzero(surplus_mask)),
        deficit_count=int(np.count_nonzero(~surplus_mask)),
        total_before=float(np.sum(before)),
        total_after=float(np.sum(after)),
        transferred=transferred,
        leftover_surplus=leftover,
    )
