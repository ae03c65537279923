"""SQLAlchemy ORM table models for the FuelEU compliance service.

Categories:
- REGISTER: RouteRow (baseline flag is the only mutable column)
- IMMUTABLE: ShipComplianceRow, BankEntryRow, PoolRow, PoolMemberRow
  (append-only; never updated or deleted by the service)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.session import Base

# ---------------------------------------------------------------------------
# Route register
# ---------------------------------------------------------------------------


class RouteRow(Base):
    """Voyage profile per ship/year. At most one row has is_baseline=True."""

    __tablename__ = "routes"
    __table_args__ = (
        Index(
            "uq_routes_single_baseline", "is_baseline", unique=True,
            postgresql_where=text("is_baseline"), sqlite_where=text("is_baseline"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    route_id: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    vessel_type: Mapped[str] = mapped_column(String(100), nullable=False)
    fuel_type: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    ghg_intensity: Mapped[float] = mapped_column(Float, nullable=False)
    fuel_consumption_t: Mapped[float] = mapped_column(Float, nullable=False)
    distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    total_emissions_t: Mapped[float] = mapped_column(Float, nullable=False)
    is_baseline: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


# ---------------------------------------------------------------------------
# Compliance (IMMUTABLE)
# ---------------------------------------------------------------------------


class ShipComplianceRow(Base):
    """CB snapshot. Latest row per (ship_id, year) is authoritative."""

    __tablename__ = "ship_compliance"
    __table_args__ = (Index("ix_ship_compliance_ship_year", "ship_id", "year"),)

    snapshot_id: Mapped[UUID] = mapped_column(primary_key=True)
    ship_id: Mapped[str] = mapped_column(String(50), nullable=False)
    route_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    cb_gco2eq: Mapped[float] = mapped_column(Float, nullable=False)
    energy_mj: Mapped[float] = mapped_column(Float, nullable=False)
    target_gco2eq_per_mj: Mapped[float] = mapped_column(Float, nullable=False)
    actual_gco2eq_per_mj: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Banking (IMMUTABLE, append-only ledger)
# ---------------------------------------------------------------------------


class BankEntryRow(Base):
    """Signed ledger entry. Banked sum = SUM(amount_gco2eq) per ship/year."""

    __tablename__ = "bank_entries"
    __table_args__ = (Index("ix_bank_entries_ship_year", "ship_id", "year"),)

    # seq gives a total creation order independent of clock resolution
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_id: Mapped[UUID] = mapped_column(unique=True, nullable=False)
    ship_id: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    amount_gco2eq: Mapped[float] = mapped_column(Float, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


# ---------------------------------------------------------------------------
# Pooling (IMMUTABLE)
# ---------------------------------------------------------------------------


class PoolRow(Base):
    __tablename__ = "pools"

    pool_id: Mapped[UUID] = mapped_column(primary_key=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    members: Mapped[list["PoolMemberRow"]] = relationship(
        back_populates="pool",
        order_by="PoolMemberRow.position",
        lazy="selectin",
    )


class PoolMemberRow(Base):
    """Allocated member; position preserves the allocator's output order."""

    __tablename__ = "pool_members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    pool_id: Mapped[UUID] = mapped_column(
        ForeignKey("pools.pool_id"), nullable=False, index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    ship_id: Mapped[str] = mapped_column(String(50), nullable=False)
    cb_before: Mapped[float] = mapped_column(Float, nullable=False)
    cb_after: Mapped[float] = mapped_column(Float, nullable=False)

    pool: Mapped[PoolRow] = relationship(back_populates="members")
