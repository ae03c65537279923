"""FastAPI banking endpoints — bank surplus CB, apply banked CB.

GET  /banking/records   — ledger history + banked sum for a ship/year
POST /banking/bank      — deposit part of a positive CB snapshot
POST /banking/apply     — withdraw previously banked CB

Each write takes the per-ship/year ledger lock, reads the snapshot or the
banked sum, validates with BankingLedger, and appends one entry, all in the
request transaction. The returned banked_sum is recomputed from the ledger.
"""

import structlog
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from src.api.dependencies import get_bank_entry_repo, get_banking_ledger, get_compliance_repo
from src.api.errors import compliance_http_error
from src.engine.banking import BankingLedger, SnapshotBalance
from src.engine.errors import ComplianceError
from src.models.banking import BankEntry, BankLedger
from src.repositories.banking import BankEntryRepository
from src.repositories.compliance import ComplianceRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/banking", tags=["banking"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class BankingRequest(BaseModel):
    ship_id: str = Field(min_length=1, max_length=50)
    year: int = Field(ge=2020, le=2100)
    amount: float
    note: str | None = Field(default=None, max_length=1000)


class BankingResponse(BaseModel):
    message: str
    entry: BankEntry
    banked_sum: float


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/records", response_model=BankLedger)
async def list_bank_records(
    ship_id: str = Query(..., min_length=1),
    year: int = Query(..., ge=2020, le=2100),
    bank_repo: BankEntryRepository = Depends(get_bank_entry_repo),
) -> BankLedger:
    """Ledger entries for a ship/year, newest first."""
    rows = await bank_repo.list_entries(ship_id, year)
    return BankLedger(
        ship_id=ship_id,
        year=year,
        banked_sum=await bank_repo.get_banked_sum(ship_id, year),
        entries=[BankEntry.model_validate(r) for r in rows],
    )


@router.post("/bank", response_model=BankingResponse)
async def bank_surplus(
    body: BankingRequest,
    bank_repo: BankEntryRepository = Depends(get_bank_entry_repo),
    compliance_repo: ComplianceRepository = Depends(get_compliance_repo),
    ledger: BankingLedger = Depends(get_banking_ledger),
) -> BankingResponse:
    """Bank surplus CB against the latest snapshot."""
    await bank_repo.lock(body.ship_id, body.year)

    snapshot_row = await compliance_repo.get_latest(body.ship_id, body.year)
    snapshot = (
        SnapshotBalance(cb_gco2eq=snapshot_row.cb_gco2eq, energy_mj=snapshot_row.energy_mj)
        if snapshot_row is not None
        else None
    )

    try:
        draft = ledger.bank_surplus(
            ship_id=body.ship_id,
            year=body.year,
            amount=body.amount,
            latest_snapshot=snapshot,
            note=body.note,
        )
    except ComplianceError as exc:
        logger.info("bank_rejected", ship_id=body.ship_id, year=body.year, kind=exc.kind)
        raise compliance_http_error(exc) from exc

    row = await bank_repo.create(
        ship_id=draft.ship_id,
        year=draft.year,
        amount_gco2eq=draft.amount_gco2eq,
        note=draft.note,
    )
    banked = await bank_repo.get_banked_sum(body.ship_id, body.year)
    logger.info(
        "cb_banked",
        ship_id=body.ship_id, year=body.year, amount=draft.amount_gco2eq, banked_sum=banked,
    )

    return BankingResponse(
        message="CB banked successfully",
        entry=BankEntry.model_validate(row),
        banked_sum=banked,
    )


@router.post("/apply", response_model=BankingResponse)
async def apply_banked(
    body: BankingRequest,
    bank_repo: BankEntryRepository = Depends(get_bank_entry_repo),
    ledger: BankingLedger = Depends(get_banking_ledger),
) -> BankingResponse:
    """Apply banked CB; appends a negative entry."""
    await bank_repo.lock(body.ship_id, body.year)

    current = await bank_repo.get_banked_sum(body.ship_id, body.year)
    try:
        outcome = ledger.apply_banked(
            ship_id=body.ship_id,
            year=body.year,
            amount=body.amount,
            current_banked_sum=current,
            note=body.note,
        )
    except ComplianceError as exc:
        logger.info("apply_rejected", ship_id=body.ship_id, year=body.year, kind=exc.kind)
        raise compliance_http_error(exc) from exc

    row = await bank_repo.create(
        ship_id=outcome.entry.ship_id,
        year=outcome.entry.year,
        amount_gco2eq=outcome.entry.amount_gco2eq,
        note=outcome.entry.note,
    )
    banked = await bank_repo.get_banked_sum(body.ship_id, body.year)
    if banked != outcome.new_banked_sum:
        logger.warning(
            "banked_sum_drift",
            ship_id=body.ship_id, year=body.year,
            ledger=banked, derived=outcome.new_banked_sum,
        )
    logger.info(
        "banked_cb_applied",
        ship_id=body.ship_id, year=body.year, amount=body.amount, banked_sum=banked,
    )

    return BankingResponse(
        message="Banked CB applied successfully",
        entry=BankEntry.model_validate(row),
        banked_sum=banked,
    )
