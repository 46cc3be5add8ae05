"""Unified exception taxonomy for the subsetting engine.

Every domain exception inherits from ``SubsetError`` and carries
structured context fields so callers can report failures consistently.

Taxonomy categories
-------------------
- ``ValidationError``: caller input violations (bounds, resolution,
  polygon/polyline arity), never recoverable by retrying.
- ``ContractError``: inconsistent arrays handed across the API
  boundary (counts vs. vertices), never recoverable by retrying.

An empty clip result is not an error and never raises.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class SubsetError(Exception):
    """Base exception for all subsetting errors.

    Attributes:
        message: Human-readable error description.
        stage: Engine stage where the error occurred
            (e.g. ``"clip_polygon"``, ``"subset"``).
        code: Machine-readable error code (e.g. ``"BOUNDS_INVALID"``).
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        return "internal"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(SubsetError):
    """Caller input failed validation at the API boundary."""

    default_code = "INPUT_INVALID"


class ContractError(SubsetError):
    """Arrays supplied across the API boundary disagree with each other."""

    default_code = "COLLECTION_CONTRACT_VIOLATED"
