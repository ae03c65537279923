"""FastAPI route register endpoints.

GET  /routes                          — list routes (optional filters)
GET  /routes/comparison               — compare all routes against the baseline
GET  /routes/{route_id}               — get one route
POST /routes/{route_id}/baseline      — make a route the (single) baseline
"""

import math

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from src.api.dependencies import get_route_repo
from src.api.errors import compliance_http_error
from src.config.settings import Settings, get_settings
from src.engine.comparison import compare_routes
from src.engine.errors import ComplianceError
from src.models.route import ComparisonReport, Route, RouteComparison
from src.repositories.routes import RouteRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("", response_model=list[Route])
async def list_routes(
    year: int | None = Query(default=None),
    vessel_type: str | None = Query(default=None),
    fuel_type: str | None = Query(default=None),
    route_repo: RouteRepository = Depends(get_route_repo),
) -> list[Route]:
    """List routes ordered by insertion."""
    rows = await route_repo.list_all(year=year, vessel_type=vessel_type, fuel_type=fuel_type)
    return [Route.model_validate(r) for r in rows]


@router.get("/comparison", response_model=ComparisonReport)
async def get_comparison(
    target: float | None = Query(default=None, description="Target gCO2e/MJ"),
    route_repo: RouteRepository = Depends(get_route_repo),
    settings: Settings = Depends(get_settings),
) -> ComparisonReport:
    """Percent difference and compliance of every route against the baseline."""
    target_value = settings.TARGET_INTENSITY if target is None else target
    if not math.isfinite(target_value):
        raise HTTPException(status_code=400, detail="Invalid target value")

    baseline = await route_repo.get_baseline()
    if baseline is None:
        raise HTTPException(
            status_code=404,
            detail="Baseline not found. Please set a baseline route first.",
        )

    routes = await route_repo.list_all()
    try:
        rows = compare_routes(baseline, routes, target_value)
    except ComplianceError as exc:
        raise compliance_http_error(exc) from exc

    by_id = {r.route_id: r for r in routes}
    return ComparisonReport(
        baseline=Route.model_validate(baseline),
        target=target_value,
        comparisons=[
            RouteComparison(
                route_id=row.route_id,
                vessel_type=by_id[row.route_id].vessel_type,
                fuel_type=by_id[row.route_id].fuel_type,
                year=by_id[row.route_id].year,
                ghg_intensity=row.ghg_intensity,
                percent_difference=row.percent_difference,
                compliant=row.compliant,
            )
            for row in rows
        ],
    )


@router.get("/{route_id}", response_model=Route)
async def get_route(
    route_id: str,
    route_repo: RouteRepository = Depends(get_route_repo),
) -> Route:
    row = await route_repo.get_by_route_id(route_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Route not found")
    return Route.model_validate(row)


@router.post("/{route_id}/baseline")
async def set_baseline(
    route_id: str,
    route_repo: RouteRepository = Depends(get_route_repo),
) -> dict[str, str]:
    """Clear the current baseline and set route_id as the new one."""
    row = await route_repo.set_baseline(route_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Route not found")

    logger.info("baseline_set", route_id=route_id)
    return {"message": "Baseline updated", "route_id": route_id}
