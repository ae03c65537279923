"""FastAPI pooling endpoints.

POST /pools             — allocate CB across members and store the pool
GET  /pools?year=       — list stored pools of a year
GET  /pools/{pool_id}   — get a stored pool

A member may omit cb_before; it is then read from the member's latest
compliance snapshot for the pool year.
"""

from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, model_validator

from src.api.dependencies import get_compliance_repo, get_pool_allocator, get_pool_repo
from src.api.errors import compliance_http_error
from src.db.tables import PoolRow
from src.engine.errors import ComplianceError, NoSnapshot
from src.engine.pooling import PoolAllocator, PoolMemberInput, pool_summary
from src.models.pooling import Pool, PoolMember
from src.repositories.compliance import ComplianceRepository
from src.repositories.pooling import PoolRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/pools", tags=["pools"])


# ---------------------------------------------------------------------------
# Request / Response schemas
# ---------------------------------------------------------------------------


class PoolMemberRequest(BaseModel):
    ship_id: str = Field(min_length=1, max_length=50)
    cb_before: float | None = None


class CreatePoolRequest(BaseModel):
    year: int = Field(ge=2020, le=2100)
    members: list[PoolMemberRequest]

    @model_validator(mode="after")
    def _unique_ships(self) -> "CreatePoolRequest":
        ship_ids = [m.ship_id for m in self.members]
        if len(ship_ids) != len(set(ship_ids)):
            raise ValueError("members must not repeat a ship_id")
        return self


class PoolSummaryResponse(BaseModel):
    surplus_count: int
    deficit_count: int
    transferred: float
    leftover_surplus: float


class CreatePoolResponse(BaseModel):
    pool: Pool
    summary: PoolSummaryResponse


def _to_pool(row: PoolRow) -> Pool:
    members = [
        PoolMember(ship_id=m.ship_id, cb_before=m.cb_before, cb_after=m.cb_after)
        for m in row.members
    ]
    return Pool(
        pool_id=row.pool_id,
        year=row.year,
        created_at=row.created_at,
        members=members,
        total_before=sum(m.cb_before for m in members),
        total_after=sum(m.cb_after for m in members),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post("", status_code=201, response_model=CreatePoolResponse)
async def create_pool(
    body: CreatePoolRequest,
    pool_repo: PoolRepository = Depends(get_pool_repo),
    compliance_repo: ComplianceRepository = Depends(get_compliance_repo),
    allocator: PoolAllocator = Depends(get_pool_allocator),
) -> CreatePoolResponse:
    """Run the greedy allocation and persist the pool with its members."""
    try:
        inputs: list[PoolMemberInput] = []
        for m in body.members:
            cb_before = m.cb_before
            if cb_before is None:
                snapshot = await compliance_repo.get_latest(m.ship_id, body.year)
                if snapshot is None:
                    raise NoSnapshot(
                        f"No compliance data found for ship {m.ship_id} in year {body.year}"
                    )
                cb_before = snapshot.cb_gco2eq
            inputs.append(PoolMemberInput(ship_id=m.ship_id, cb_before=cb_before))

        allocations = allocator.allocate(inputs)
    except ComplianceError as exc:
        logger.info("pool_rejected", year=body.year, kind=exc.kind)
        raise compliance_http_error(exc) from exc

    row = await pool_repo.create(year=body.year, allocations=allocations)
    summary = pool_summary(allocations)
    logger.info(
        "pool_created",
        pool_id=str(row.pool_id), year=body.year,
        members=summary.member_count, transferred=summary.transferred,
    )

    return CreatePoolResponse(
        pool=_to_pool(row),
        summary=PoolSummaryResponse(
            surplus_count=summary.surplus_count,
            deficit_count=summary.deficit_count,
            transferred=summary.transferred,
            leftover_surplus=summary.leftover_surplus,
        ),
    )


@router.get("", response_model=list[Pool])
async def list_pools(
    year: int = Query(..., ge=2020, le=2100),
    pool_repo: PoolRepository = Depends(get_pool_repo),
) -> list[Pool]:
    """Stored pools of a year, newest first."""
    return [_to_pool(row) for row in await pool_repo.list_by_year(year)]


@router.get("/{pool_id}", response_model=Pool)
async def get_pool(
    pool_id: UUID,
    pool_repo: PoolRepository = Depends(get_pool_repo),
) -> Pool:
    row = await pool_repo.get(pool_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Pool {pool_id} not found.")
    return _to_pool(row)
