"""Tests for the unified exception taxonomy.

Validates:
- PipelineError hierarchy and structured attributes
- Category classification (validation, transient, permanent, contract)
- HTTP status mapping (client rejection vs server fault)
- ``to_error_dict()`` produces stable payload keys
- All gateway exceptions are PipelineError subclasses
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from tileset_gateway.clients.catalog import CatalogError
from tileset_gateway.clients.lookup_tables import LookupTablesError
from tileset_gateway.core.config import ConfigValidationError
from tileset_gateway.core.exceptions import (
    ContractError,
    IntersectionError,
    LinkFormatError,
    PayloadRejectedError,
    PermanentError,
    PipelineError,
    TilesetFormatError,
    TransientError,
    ValidationError,
)
from tileset_gateway.models.outcome import Invalid
from tileset_gateway.providers.base import (
    ProviderError,
    ProviderNotFoundError,
    ProviderReadError,
)


class TestPipelineErrorBase:
    """PipelineError base class behavior."""

    def test_default_attributes(self) -> None:
        err = PipelineError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.retryable is False
        assert err.correlation_id == ""

    def test_custom_attributes(self) -> None:
        err = PipelineError(
            "fail",
            stage="catalog",
            code="CATALOG_REQUEST_FAILED",
            retryable=True,
            correlation_id="abc-123",
        )
        assert err.stage == "catalog"
        assert err.code == "CATALOG_REQUEST_FAILED"
        assert err.retryable is True
        assert err.correlation_id == "abc-123"

    def test_str_is_message(self) -> None:
        err = PipelineError("human-readable error")
        assert str(err) == "human-readable error"

    def test_fallback_category_follows_retryable(self) -> None:
        assert PipelineError("x", retryable=True).category == "transient"
        assert PipelineError("x").category == "permanent"


class TestCategories:
    """Category base classes set category and retry defaults."""

    def test_validation(self) -> None:
        err = ValidationError("bad payload")
        assert err.category == "validation"
        assert err.retryable is False

    def test_transient(self) -> None:
        err = TransientError("timeout")
        assert err.category == "transient"
        assert err.retryable is True

    def test_permanent(self) -> None:
        err = PermanentError("broken geometry")
        assert err.category == "permanent"
        assert err.retryable is False

    def test_contract(self) -> None:
        err = ContractError("schema drift")
        assert err.category == "contract"
        assert err.retryable is False


class TestHttpStatus:
    """Client-correctable errors map to 400, faults to 500."""

    @pytest.mark.parametrize(
        "err",
        [ValidationError("x"), ContractError("x"), PayloadRejectedError("x")],
    )
    def test_client_errors(self, err: PipelineError) -> None:
        assert err.http_status == 400

    @pytest.mark.parametrize(
        "err",
        [
            TransientError("x"),
            PermanentError("x"),
            IntersectionError("x"),
            CatalogError("x"),
            ProviderReadError("blob", "x"),
        ],
    )
    def test_server_faults(self, err: PipelineError) -> None:
        assert err.http_status == 500


class TestToErrorDict:
    """to_error_dict() exposes stable keys."""

    EXPECTED_KEYS: ClassVar[set[str]] = {
        "category",
        "code",
        "stage",
        "message",
        "retryable",
        "correlation_id",
    }

    def test_keys(self) -> None:
        payload = IntersectionError("geometry exploded").to_error_dict()
        assert set(payload) == self.EXPECTED_KEYS

    def test_values(self) -> None:
        payload = IntersectionError("geometry exploded", correlation_id="c-1").to_error_dict()
        assert payload["category"] == "permanent"
        assert payload["code"] == "INTERSECTION_FAILED"
        assert payload["stage"] == "intersection"
        assert payload["message"] == "geometry exploded"
        assert payload["retryable"] is False
        assert payload["correlation_id"] == "c-1"


class TestGatewayExceptions:
    """Every gateway exception joins the taxonomy with its stage and code."""

    @pytest.mark.parametrize(
        ("exc_cls", "base", "stage", "code"),
        [
            (PayloadRejectedError, ValidationError, "validation", "PAYLOAD_REJECTED"),
            (IntersectionError, PermanentError, "intersection", "INTERSECTION_FAILED"),
            (TilesetFormatError, PermanentError, "tileset", "TILESET_FORMAT_INVALID"),
            (LinkFormatError, PermanentError, "link_resolver", "LINK_FORMAT_INVALID"),
            (CatalogError, TransientError, "catalog", "CATALOG_REQUEST_FAILED"),
            (LookupTablesError, TransientError, "lookup_tables", "LOOKUP_TABLES_REQUEST_FAILED"),
        ],
    )
    def test_subclass_defaults(
        self,
        exc_cls: type[PipelineError],
        base: type[PipelineError],
        stage: str,
        code: str,
    ) -> None:
        err = exc_cls("message")
        assert isinstance(err, base)
        assert isinstance(err, PipelineError)
        assert err.stage == stage
        assert err.code == code

    def test_config_error_is_pipeline_error(self) -> None:
        assert issubclass(ConfigValidationError, PipelineError)

    def test_provider_errors(self) -> None:
        not_found = ProviderNotFoundError("nfs", "missing", path="/a")
        read = ProviderReadError("blob", "boom", retryable=True)
        assert isinstance(not_found, ProviderError)
        assert not_found.code == "PROVIDER_FILE_NOT_FOUND"
        assert not_found.retryable is False
        assert read.code == "PROVIDER_READ_FAILED"
        assert read.category == "transient"

    def test_invalid_outcome_becomes_rejection(self) -> None:
        err = Invalid("minResolutionMeter should not be bigger than maxResolutionMeter").to_error(
            correlation_id="req-7",
        )
        assert isinstance(err, PayloadRejectedError)
        assert err.message == "minResolutionMeter should not be bigger than maxResolutionMeter"
        assert err.correlation_id == "req-7"
        assert err.http_status == 400
