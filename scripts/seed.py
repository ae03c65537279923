"""Seed script — load sample routes into the FuelEU database.

Creates:
1. Five sample routes R001–R005 (R001 is the baseline)
2. One CB snapshot per route for its own reporting year

Idempotent: safe to run multiple times — skips if R001 already exists.

Usage:
    python -m scripts.seed          # against DATABASE_URL from .env
    pytest tests/scripts/test_seed.py  # against aiosqlite in-memory
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession

from src.db.tables import RouteRow, ShipComplianceRow
from src.engine.cb_calculator import DEFAULT_TARGET_INTENSITY, compute_cb
from src.repositories.compliance import ComplianceRepository
from src.repositories.routes import RouteRepository

# ---------------------------------------------------------------------------
# Sample route register
# Intensities in gCO2e/MJ, fuel in tonnes, emissions in tonnes CO2e.
# R002 (LNG) and R004 sit below the 89.3368 target; the rest are in deficit.
# ---------------------------------------------------------------------------

BASELINE_ROUTE_ID = "R001"

SAMPLE_ROUTES: list[dict] = [
    {"route_id": "R001", "vessel_type": "Container", "fuel_type": "HFO", "year": 2024,
     "ghg_intensity": 91.0, "fuel_consumption_t": 5000.0, "distance_km": 12000.0,
     "total_emissions_t": 4500.0},
    {"route_id": "R002", "vessel_type": "BulkCarrier", "fuel_type": "LNG", "year": 2024,
     "ghg_intensity": 88.0, "fuel_consumption_t": 4800.0, "distance_km": 11500.0,
     "total_emissions_t": 4200.0},
    {"route_id": "R003", "vessel_type": "Tanker", "fuel_type": "MGO", "year": 2024,
     "ghg_intensity": 93.5, "fuel_consumption_t": 5100.0, "distance_km": 12500.0,
     "total_emissions_t": 4700.0},
    {"route_id": "R004", "vessel_type": "RoRo", "fuel_type": "HFO", "year": 2025,
     "ghg_intensity": 89.2, "fuel_consumption_t": 4900.0, "distance_km": 11800.0,
     "total_emissions_t": 4300.0},
    {"route_id": "R005", "vessel_type": "Container", "fuel_type": "LNG", "year": 2025,
     "ghg_intensity": 90.5, "fuel_consumption_t": 4950.0, "distance_km": 11900.0,
     "total_emissions_t": 4400.0},
]


async def seed_routes(session: AsyncSession) -> list[RouteRow]:
    """Insert the sample routes, flagging the baseline."""
    repo = RouteRepository(session)
    rows = []
    for route in SAMPLE_ROUTES:
        rows.append(await repo.create(
            **route, is_baseline=(route["route_id"] == BASELINE_ROUTE_ID),
        ))
    return rows


async def seed_snapshots(
    session: AsyncSession,
    routes: list[RouteRow],
    target: float = DEFAULT_TARGET_INTENSITY,
) -> list[ShipComplianceRow]:
    """Compute and store one CB snapshot per route for its own year."""
    repo = ComplianceRepository(session)
    rows = []
    for route in routes:
        result = compute_cb(target, route.ghg_intensity, route.fuel_consumption_t)
        rows.append(await repo.create(
            ship_id=route.route_id,
            route_id=route.route_id,
            year=route.year,
            cb_gco2eq=result.cb_gco2eq,
            energy_mj=result.energy_mj,
            target_gco2eq_per_mj=target,
            actual_gco2eq_per_mj=route.ghg_intensity,
        ))
    return rows


async def seed_demo(session: AsyncSession) -> dict:
    """Idempotent demo seed: routes + snapshots.

    Returns dict with keys: created (bool), route_count, snapshot_count,
    snapshots ((ship_id, year, cb) per stored snapshot; only when created).
    If the baseline route already exists, returns created=False and skips.
    """
    existing = await RouteRepository(session).get_by_route_id(BASELINE_ROUTE_ID)
    if existing is not None:
        return {"created": False, "route_count": 0, "snapshot_count": 0}

    routes = await seed_routes(session)
    snapshots = await seed_snapshots(session, routes)

    return {
        "created": True,
        "route_count": len(routes),
        "snapshot_count": len(snapshots),
        "snapshots": [(s.ship_id, s.year, s.cb_gco2eq) for s in snapshots],
    }


# ---------------------------------------------------------------------------
# CLI entry point: python -m scripts.seed
# ---------------------------------------------------------------------------


async def _run_seed() -> None:
    """Run the seed against the real database (idempotent)."""
    from src.db.session import async_session_factory

    async with async_session_factory() as session:
        result = await seed_demo(session)

        if not result["created"]:
            print(f"Demo data already seeded (route {BASELINE_ROUTE_ID} exists). Skipping.")
            return

        await session.commit()

        print("Seed complete.")
        print(f"  Routes:    {result['route_count']} (baseline {BASELINE_ROUTE_ID})")
        print()
        print(f"  {'Ship':<6} {'Year':>6} {'CB (tCO2e)':>14}")
        print(f"  {'─' * 6} {'─' * 6} {'─' * 14}")
        for ship_id, year, cb in result["snapshots"]:
            print(f"  {ship_id:<6} {year:>6} {cb / 1e6:>14,.2f}")


if __name__ == "__main__":
    asyncio.run(_run_seed())
