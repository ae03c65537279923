"""Pydantic schemas for CB pools.

A pool groups ships of one reporting year. Members keep their pre-pool CB
(cb_before) and the allocator's result (cb_after). Pools are immutable once
created.
"""

from uuid import UUID

from pydantic import Field

from src.models.common import FuelEUBase, UTCTimestamp


class PoolMember(FuelEUBase):
    ship_id: str
    cb_before: float
    cb_after: float


class Pool(FuelEUBase):
    """A stored pool with its allocated members."""

    pool_id: UUID
    year: int
    created_at: UTCTimestamp
    members: list[PoolMember] = Field(default_factory=list)
    total_before: float
    total_after: float
