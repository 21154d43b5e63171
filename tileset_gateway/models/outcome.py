"""Validation outcome returned by every pipeline step.

An outcome is either ``Valid`` or ``Invalid(reason)``.  Steps return an
outcome for expected, user-correctable failures instead of raising, so a
business rejection can never be mistaken for an infrastructure fault
(which is always a raised ``PipelineError``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from tileset_gateway.core.exceptions import PayloadRejectedError


@dataclass(frozen=True, slots=True)
class Valid:
    """Every check passed."""

    @property
    def is_valid(self) -> Literal[True]:
        return True

    def to_dict(self) -> dict[str, object]:
        """Serialise to the gateway's ``{"isValid": ...}`` response shape."""
        return {"isValid": True}


@dataclass(frozen=True, slots=True)
class Invalid:
    """A business rule failed.

    Attributes:
        reason: Deterministic, client-facing description of the failure.
    """

    reason: str

    @property
    def is_valid(self) -> Literal[False]:
        return False

    def to_dict(self) -> dict[str, object]:
        """Serialise to the gateway's ``{"isValid": ..., "message": ...}`` shape."""
        return {"isValid": False, "message": self.reason}

    def to_error(self, *, correlation_id: str = "") -> PayloadRejectedError:
        """Build the client-facing rejection error for this outcome."""
        return PayloadRejectedError(self.reason, correlation_id=correlation_id)


ValidationOutcome = Valid | Invalid

VALID = Valid()
