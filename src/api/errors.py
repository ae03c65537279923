"""Translate compliance engine errors into HTTP responses.

The engine only reports a failure kind; the status code is decided here.
Body shape: {"detail": {"kind": ..., "message": ...}}.
"""

from fastapi import HTTPException

from src.engine.errors import (
    ComplianceError,
    InvalidBaseline,
    NoSnapshot,
    PoolInvariantViolation,
)

_STATUS_BY_KIND: dict[str, int] = {
    NoSnapshot.kind: 404,
    InvalidBaseline.kind: 422,
    PoolInvariantViolation.kind: 500,
}


def compliance_http_error(exc: ComplianceError) -> HTTPException:
    """Build the HTTPException for an engine rejection (400 unless mapped)."""
    return HTTPException(
        status_code=_STATUS_BY_KIND.get(exc.kind, 400),
        detail=exc.as_dict(),
    )
