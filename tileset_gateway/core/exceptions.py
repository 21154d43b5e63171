"""Unified gateway exception taxonomy.

Provides a shared base exception hierarchy for the validation pipeline,
its file providers and its REST collaborators.  Every domain exception
inherits from ``PipelineError`` and carries structured context fields
that enable consistent retry decisions, HTTP status mapping and
operator diagnostics.

Taxonomy categories
-------------------
- ``ValidationError``   — user-correctable payload rejections, never retryable.
- ``TransientError``    — temporary failures (network, storage), retryable.
- ``PermanentError``    — unrecoverable failures (malformed geometry), not retryable.
- ``ContractError``     — payload/schema drift between services, never retryable.

Business-rule rejections are *returned* by the pipeline as ``Invalid``
outcomes; only ``Invalid.to_error()`` turns one into a
``PayloadRejectedError`` at the boundary.  Everything else raised from
this package is an infrastructure fault.
"""

from __future__ import annotations

from http import HTTPStatus


class PipelineError(Exception):
    """Base exception for all gateway-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"intersection"``, ``"catalog"``).
        code: Machine-readable error code (e.g. ``"INTERSECTION_FAILED"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Request correlation identifier.
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
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    @property
    def http_status(self) -> int:
        """HTTP status the surrounding API should answer with."""
        if self.category in ("validation", "contract"):
            return int(HTTPStatus.BAD_REQUEST)
        return int(HTTPStatus.INTERNAL_SERVER_ERROR)

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(PipelineError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(PipelineError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(PipelineError):
    """Payload or schema drift between services. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Validation-pipeline errors
# ---------------------------------------------------------------------------


class PayloadRejectedError(ValidationError):
    """A payload failed a business rule; the message is the exact reason."""

    default_stage = "validation"
    default_code = "PAYLOAD_REJECTED"


class IntersectionError(PermanentError):
    """Polygon algebra failed on malformed footprint or model geometry."""

    default_stage = "intersection"
    default_code = "INTERSECTION_FAILED"


class TilesetFormatError(PermanentError):
    """A fetched tileset document is not valid JSON."""

    default_stage = "tileset"
    default_code = "TILESET_FORMAT_INVALID"


class LinkFormatError(PermanentError):
    """A catalog record's links string does not point at a tileset."""

    default_stage = "link_resolver"
    default_code = "LINK_FORMAT_INVALID"
