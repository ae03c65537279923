"""Banking ledger rules — bank surplus CB, apply banked CB.

Stateless rule engine. Callers supply the latest compliance snapshot or the
current banked sum; the engine validates and returns a draft ledger entry.
It never reads or writes durable state, so callers must serialize the
read-validate-append cycle per (ship_id, year) at the persistence boundary.

Sign convention: positive amount = deposit (bank), negative = withdrawal
(apply). The banked balance of a ship/year is always sum(entry amounts).

Checks run in a fixed order and the first failure wins. No entry is produced
on failure.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from src.engine.errors import (
    AmountExceedsAvailable,
    AmountExceedsBanked,
    InvalidAmount,
    NoBankedBalance,
    NoSnapshot,
    NoSurplus,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotBalance:
    """Latest CB snapshot for a ship/year, as read from the snapshot provider."""

    cb_gco2eq: float
    energy_mj: float


@dataclass(frozen=True)
class LedgerEntryDraft:
    """A validated ledger entry, not yet persisted."""

    ship_id: str
    year: int
    amount_gco2eq: float
    note: str | None = None

    @property
    def is_deposit(self) -> bool:
        return self.amount_gco2eq > 0


@dataclass(frozen=True)
class BankingOutcome:
    """Result of apply_banked: the draft entry plus the derived new sum."""

    entry: LedgerEntryDraft
    new_banked_sum: float


def _require_positive_amount(amount: float, action: str) -> None:
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(f"Amount to {action} must be positive (received {amount})")


def banked_sum(amounts: Iterable[float]) -> float:
    """Project the banked balance from ledger entry amounts (in creation order)."""
    total = 0.0
    for amount in amounts:
        total += amount
    return total


class BankingLedger:
    """Validates banking operations against a snapshot or a banked sum."""

    def bank_surplus(
        self,
        *,
        ship_id: str,
        year: int,
        amount: float,
        latest_snapshot: SnapshotBalance | None,
        note: str | None = None,
    ) -> LedgerEntryDraft:
        """Bank part or all of a positive CB.

        Raises:
            InvalidAmount: amount <= 0.
            NoSnapshot: no snapshot for (ship_id, year).
            NoSurplus: snapshot CB <= 0.
            AmountExceedsAvailable: amount > snapshot CB.
        """
        _require_positive_amount(amount, "bank")

        if latest_snapshot is None:
            raise NoSnapshot(
                f"No compliance data found for ship {ship_id} in year {year}"
            )

        available = latest_snapshot.cb_gco2eq
        if available <= 0:
            raise NoSurplus(
                f"Cannot bank: CB must be positive (surplus required), got {available}"
            )

        if amount > available:
            raise AmountExceedsAvailable(
                f"Cannot bank: amount ({amount}) exceeds available CB ({available})"
            )

        logger.debug("bank_surplus %s/%s amount=%s available=%s", ship_id, year, amount, available)
        return LedgerEntryDraft(ship_id=ship_id, year=year, amount_gco2eq=amount, note=note)

    def apply_banked(
        self,
        *,
        ship_id: str,
        year: int,
        amount: float,
        current_banked_sum: float,
        note: str | None = None,
    ) -> BankingOutcome:
        """Withdraw previously banked CB.

        The returned new_banked_sum is advisory; the authoritative value is
        re-derived by summing the ledger after the entry is appended.

        Raises:
            InvalidAmount: amount <= 0.
            NoBankedBalance: current banked sum <= 0.
            AmountExceedsBanked: amount > current banked sum.
        """
        _require_positive_amount(amount, "apply")

        if current_banked_sum <= 0:
            raise NoBankedBalance(
                f"No banked CB available to apply for ship {ship_id} in year {year}"
            )

        if amount > current_banked_sum:
            raise AmountExceedsBanked(
                f"Cannot apply: amount ({amount}) exceeds banked CB ({current_banked_sum})"
            )

        entry = LedgerEntryDraft(ship_id=ship_id, year=year, amount_gco2eq=-amount, note=note)
        return BankingOutcome(entry=entry, new_banked_sum=current_banked_sum - amount)
