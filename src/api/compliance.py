"""FastAPI compliance endpoints — CB computation and adjusted balances.

GET /compliance/cb            — compute CB for a route and store a snapshot
GET /compliance/adjusted-cb   — latest CB per ship net of banking movements

The ship id of a snapshot is the route id (one ship per route).
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.dependencies import get_bank_entry_repo, get_compliance_repo, get_route_repo
from src.api.errors import compliance_http_error
from src.config.settings import Settings, get_settings
from src.engine.cb_calculator import compute_cb
from src.engine.errors import ComplianceError
from src.models.compliance import AdjustedCB, ComplianceSnapshot
from src.repositories.banking import BankEntryRepository
from src.repositories.compliance import ComplianceRepository
from src.repositories.routes import RouteRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/compliance", tags=["compliance"])


@router.get("/cb", response_model=ComplianceSnapshot)
async def get_compliance_cb(
    route_id: str = Query(..., min_length=1),
    year: int = Query(..., ge=2020, le=2100),
    target: float | None = Query(default=None, description="Target gCO2e/MJ"),
    route_repo: RouteRepository = Depends(get_route_repo),
    compliance_repo: ComplianceRepository = Depends(get_compliance_repo),
    settings: Settings = Depends(get_settings),
) -> ComplianceSnapshot:
    """Compute CB from the route's intensity and fuel, then store the snapshot."""
    route = await route_repo.get_by_route_id(route_id)
    if route is None:
        raise HTTPException(status_code=404, detail="Route not found")

    target_value = settings.TARGET_INTENSITY if target is None else target
    try:
        result = compute_cb(target_value, route.ghg_intensity, route.fuel_consumption_t)
    except ComplianceError as exc:
        raise compliance_http_error(exc) from exc

    row = await compliance_repo.create(
        ship_id=route.route_id,
        route_id=route.route_id,
        year=year,
        cb_gco2eq=result.cb_gco2eq,
        energy_mj=result.energy_mj,
        target_gco2eq_per_mj=target_value,
        actual_gco2eq_per_mj=route.ghg_intensity,
    )
    logger.info(
        "cb_snapshot_stored",
        ship_id=row.ship_id, year=year, cb_gco2eq=row.cb_gco2eq,
    )

    return ComplianceSnapshot.model_validate(row)


@router.get("/adjusted-cb", response_model=list[AdjustedCB])
async def get_adjusted_cb(
    year: int = Query(..., ge=2020, le=2100),
    compliance_repo: ComplianceRepository = Depends(get_compliance_repo),
    bank_repo: BankEntryRepository = Depends(get_bank_entry_repo),
) -> list[AdjustedCB]:
    """Latest snapshot CB of each ship minus its banked sum for the year."""
    snapshots = await compliance_repo.list_latest_by_year(year)
    banked = await bank_repo.get_banked_sums(year)

    return [
        AdjustedCB(
            ship_id=s.ship_id,
            year=year,
            cb_before=s.cb_gco2eq,
            banked=banked.get(s.ship_id, 0.0),
            cb_after=s.cb_gco2eq - banked.get(s.ship_id, 0.0),
        )
        for s in snapshots
    ]
