"""Tests for the gateway wire models and validation outcomes.

Validates:
- camelCase aliases and snake_case population
- Extra metadata passes through untouched
- The footprint is kept raw for the footprint validator
- ``Valid`` / ``Invalid`` serialisation
"""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import ValidationError

from tileset_gateway.models.outcome import VALID, Invalid, Valid
from tileset_gateway.models.payloads import (
    IngestionPayload,
    LookupOption,
    ModelMetadata,
    Record3D,
    UpdatePayload,
)


def _ingestion_body() -> dict:
    return {
        "modelPath": "/data/models/Sphere",
        "tilesetFilename": "tileset.json",
        "metadata": {
            "productName": "Tel Aviv",
            "productType": "3DPhotoRealistic",
            "sourceDateStart": "2023-01-01T00:00:00Z",
            "sourceDateEnd": "2023-06-01T00:00:00Z",
            "minResolutionMeter": 0.5,
            "maxResolutionMeter": 2,
            "classification": "4",
            "footprint": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [0, 0]]]},
            "producerName": "IDFMU",
        },
    }


class TestIngestionPayload:
    """Ingestion payloads parse from the wire format."""

    def test_aliases(self) -> None:
        payload = IngestionPayload.model_validate(_ingestion_body())
        assert payload.model_path == "/data/models/Sphere"
        assert payload.tileset_filename == "tileset.json"
        assert payload.metadata.product_name == "Tel Aviv"
        assert payload.metadata.product_type == "3DPhotoRealistic"
        assert payload.metadata.min_resolution_meter == 0.5
        assert payload.metadata.max_resolution_meter == 2.0
        assert payload.metadata.product_id is None

    def test_dates_parsed(self) -> None:
        payload = IngestionPayload.model_validate(_ingestion_body())
        assert isinstance(payload.metadata.source_date_start, datetime)
        assert payload.metadata.source_date_start < payload.metadata.source_date_end

    def test_footprint_kept_raw(self) -> None:
        body = _ingestion_body()
        body["metadata"]["footprint"] = {"type": "Point", "coordinates": [1, 2]}
        payload = IngestionPayload.model_validate(body)
        assert payload.metadata.footprint == {"type": "Point", "coordinates": [1, 2]}

    def test_extra_metadata_passes_through(self) -> None:
        payload = IngestionPayload.model_validate(_ingestion_body())
        dumped = payload.metadata.model_dump(by_alias=True)
        assert dumped["producerName"] == "IDFMU"

    def test_missing_model_path_rejected(self) -> None:
        body = _ingestion_body()
        del body["modelPath"]
        with pytest.raises(ValidationError, match="modelPath"):
            IngestionPayload.model_validate(body)

    def test_populate_by_name(self) -> None:
        payload = IngestionPayload(
            model_path="/data/models/Region",
            tileset_filename="tileset.json",
            metadata=ModelMetadata(product_name="Region"),
        )
        assert payload.metadata.classification == ""


class TestUpdatePayload:
    """Every update field is optional."""

    def test_empty(self) -> None:
        payload = UpdatePayload.model_validate({})
        assert payload.product_name is None
        assert payload.footprint is None
        assert payload.classification is None

    def test_partial(self) -> None:
        payload = UpdatePayload.model_validate({"sourceDateEnd": "2024-01-01", "productName": "x"})
        assert payload.source_date_end == datetime(2024, 1, 1)
        assert payload.source_date_start is None
        assert payload.product_name == "x"


class TestRecord3D:
    """Catalog records."""

    def test_from_catalog(self) -> None:
        record = Record3D.model_validate(
            {
                "id": "rec-1",
                "productId": "prod-1",
                "productName": "Tel Aviv",
                "productSource": "/data/models/Sphere",
                "links": "https://host/api/3d/v1/b3dm/prod-1/tileset.json",
                "productStatus": "PUBLISHED",
            }
        )
        assert record.id == "rec-1"
        assert record.product_source == "/data/models/Sphere"
        assert record.min_resolution_meter is None

    def test_lookup_option_ignores_extras(self) -> None:
        option = LookupOption.model_validate({"value": "4", "translationCode": "CLS", "x": 1})
        assert option.value == "4"
        assert option.translation_code == "CLS"
        assert not hasattr(option, "x")


class TestValidationOutcome:
    """Valid / Invalid behave as a closed result type."""

    def test_valid(self) -> None:
        assert VALID == Valid()
        assert VALID.is_valid is True
        assert VALID.to_dict() == {"isValid": True}

    def test_invalid(self) -> None:
        outcome = Invalid("classification is not a valid value.. Optional values: a,b")
        assert outcome.is_valid is False
        assert outcome.to_dict() == {
            "isValid": False,
            "message": "classification is not a valid value.. Optional values: a,b",
        }

    def test_invalid_is_immutable(self) -> None:
        outcome = Invalid("x")
        with pytest.raises(AttributeError):
            outcome.reason = "y"  # type: ignore[misc]
