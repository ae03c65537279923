"""Shared types, enums, and base models used across FuelEU domain models."""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field
from uuid_extensions import uuid7


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def new_uuid7() -> UUID:
    """Generate a new time-sortable UUID v7."""
    return uuid7()


# --- Reusable annotated types ---

UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]
ComplianceYear = Annotated[
    int, Field(ge=2020, le=2100, description="FuelEU reporting year.")
]


# --- Shared enums ---


class BalanceStatus(StrEnum):
    """Sign of a carbon balance."""

    SURPLUS = "SURPLUS"
    DEFICIT = "DEFICIT"
    NEUTRAL = "NEUTRAL"

    @classmethod
    def of(cls, cb_gco2eq: float) -> "BalanceStatus":
        if cb_gco2eq > 0:
            return cls.SURPLUS
        if cb_gco2eq < 0:
            return cls.DEFICIT
        return cls.NEUTRAL


# --- Base model ---


class FuelEUBase(BaseModel):
    """Base model with common configuration for all FuelEU Pydantic models."""

    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
        "protected_namespaces": (),
    }
