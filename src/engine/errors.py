"""Compliance engine error taxonomy.

Every rejection raised by the deterministic engine is a ComplianceError
(a ValueError subclass) carrying a stable ``kind`` string. Errors are pure
functions of their inputs: retrying with the same inputs reproduces them.
The HTTP layer maps kinds to status codes; the engine never does.
"""


class ComplianceError(ValueError):
    """Base class for all compliance engine validation failures."""

    kind: str = "ComplianceError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.message}


class InvalidInput(ComplianceError):
    """Raised when a numeric precondition fails (NaN intensity, negative fuel)."""

    kind = "InvalidInput"


class InvalidAmount(ComplianceError):
    """Raised when a banking amount is not strictly positive."""

    kind = "InvalidAmount"


class NoSnapshot(ComplianceError):
    """Raised when no compliance snapshot exists for a ship/year."""

    kind = "NoSnapshot"


class NoSurplus(ComplianceError):
    """Raised when banking is attempted against a non-positive CB."""

    kind = "NoSurplus"


class AmountExceedsAvailable(ComplianceError):
    """Raised when the amount to bank exceeds the snapshot CB."""

    kind = "AmountExceedsAvailable"


class NoBankedBalance(ComplianceError):
    """Raised when applying banked CB with nothing banked."""

    kind = "NoBankedBalance"


class AmountExceedsBanked(ComplianceError):
    """Raised when the amount to apply exceeds the banked sum."""

    kind = "AmountExceedsBanked"


class EmptyPool(ComplianceError):
    """Raised when a pool has no members."""

    kind = "EmptyPool"


class NegativePoolSum(ComplianceError):
    """Raised when the pool's total CB before allocation is negative."""

    kind = "NegativePoolSum"


class PoolInvariantViolation(ComplianceError):
    """Raised when an allocation breaks a pool post-condition."""

    kind = "PoolInvariantViolation"


class InvalidBaseline(ComplianceError):
    """Raised when the baseline intensity cannot be used as a divisor."""

    kind = "InvalidBaseline"
