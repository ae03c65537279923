"""Initial schema — routes, ship_compliance, bank_entries, pools, pool_members.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # -- Route register (baseline flag is the only mutable column) --
    op.create_table(
        "routes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("route_id", sa.String(50), nullable=False, unique=True),
        sa.Column("vessel_type", sa.String(100), nullable=False),
        sa.Column("fuel_type", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer, nullable=False, index=True),
        sa.Column("ghg_intensity", sa.Float, nullable=False),
        sa.Column("fuel_consumption_t", sa.Float, nullable=False),
        sa.Column("distance_km", sa.Float, nullable=False),
        sa.Column("total_emissions_t", sa.Float, nullable=False),
        sa.Column("is_baseline", sa.Boolean, server_default="false", nullable=False),
    )
    # At most one baseline route
    op.create_index(
        "uq_routes_single_baseline",
        "routes",
        ["is_baseline"],
        unique=True,
        postgresql_where=sa.text("is_baseline"),
    )

    # -- Compliance snapshots (IMMUTABLE) --
    op.create_table(
        "ship_compliance",
        sa.Column("snapshot_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("ship_id", sa.String(50), nullable=False),
        sa.Column("route_id", sa.String(50), nullable=True),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("cb_gco2eq", sa.Float, nullable=False),
        sa.Column("energy_mj", sa.Float, nullable=False),
        sa.Column("target_gco2eq_per_mj", sa.Float, nullable=False),
        sa.Column("actual_gco2eq_per_mj", sa.Float, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_ship_compliance_ship_year", "ship_compliance", ["ship_id", "year"])

    # -- Banking ledger (IMMUTABLE, append-only) --
    op.create_table(
        "bank_entries",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("entry_id", UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("ship_id", sa.String(50), nullable=False),
        sa.Column("year", sa.Integer, nullable=False),
        sa.Column("amount_gco2eq", sa.Float, nullable=False),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_bank_entries_ship_year", "bank_entries", ["ship_id", "year"])

    # -- Pools (IMMUTABLE) --
    op.create_table(
        "pools",
        sa.Column("pool_id", UUID(as_uuid=True), primary_key=True),
        sa.Column("year", sa.Integer, nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "pool_members",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "pool_id", UUID(as_uuid=True),
            sa.ForeignKey("pools.pool_id"), nullable=False, index=True,
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.Column("ship_id", sa.String(50), nullable=False),
        sa.Column("cb_before", sa.Float, nullable=False),
        sa.Column("cb_after", sa.Float, nullable=False),
    )


def downgrade() -> None:
    op.drop_table("pool_members")
    op.drop_table("pools")
    op.drop_index("ix_bank_entries_ship_year", table_name="bank_entries")
    op.drop_table("bank_entries")
    op.drop_index("ix_ship_compliance_ship_year", table_name="ship_compliance")
    op.drop_table("ship_compliance")
    op.drop_index("uq_routes_single_baseline", table_name="routes")
    op.drop_table("routes")
