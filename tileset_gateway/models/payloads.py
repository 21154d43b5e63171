"""Pydantic models for gateway payloads and catalog records.

Field names follow the wire format of the surrounding API (camelCase
aliases) while the Python attributes are snake_case.  ``extra="allow"``
lets the full 3D-layer metadata flow through untouched: only the fields
the validation pipeline reads are declared here.

The footprint is typed ``Any`` on purpose.  Structural checking belongs
to ``FootprintValidator`` so that a malformed footprint becomes an
``Invalid`` outcome with the gateway's message, not a pydantic error.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field


class GeoJsonPolygon(TypedDict):
    """GeoJSON Polygon geometry as emitted by the geometry converter."""

    type: str
    coordinates: list[list[list[float]]]


_WIRE_CONFIG = ConfigDict(populate_by_name=True, extra="allow")


class ModelMetadata(BaseModel):
    """Metadata block of an ingestion request.

    Attributes:
        footprint: Claimed ground coverage (raw GeoJSON Polygon).
        source_date_start: Acquisition start.
        source_date_end: Acquisition end.
        min_resolution_meter: Finest resolution, in metres.
        max_resolution_meter: Coarsest resolution, in metres.
        product_type: Catalog product type (e.g. ``"3DPhotoRealistic"``).
        product_name: Human-readable product name.
        product_id: Existing product to add a version to, if any.
        classification: Security classification value from the lookup table.
    """

    model_config = _WIRE_CONFIG

    footprint: Any = None
    source_date_start: datetime | None = Field(default=None, alias="sourceDateStart")
    source_date_end: datetime | None = Field(default=None, alias="sourceDateEnd")
    min_resolution_meter: float | None = Field(default=None, alias="minResolutionMeter")
    max_resolution_meter: float | None = Field(default=None, alias="maxResolutionMeter")
    product_type: str = Field(default="", alias="productType")
    product_name: str = Field(default="", alias="productName")
    product_id: str | None = Field(default=None, alias="productId")
    classification: str = ""


class IngestionPayload(BaseModel):
    """Request to ingest a new model from the shared storage.

    Attributes:
        model_path: Client-side path of the model folder (under ``base_path``).
        tileset_filename: Tileset document name inside the model folder.
        metadata: Product metadata.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", protected_namespaces=())

    model_path: str = Field(alias="modelPath")
    tileset_filename: str = Field(alias="tilesetFilename")
    metadata: ModelMetadata


class UpdatePayload(BaseModel):
    """Partial metadata update.  Only supplied fields are validated."""

    model_config = _WIRE_CONFIG

    product_name: str | None = Field(default=None, alias="productName")
    source_date_start: datetime | None = Field(default=None, alias="sourceDateStart")
    source_date_end: datetime | None = Field(default=None, alias="sourceDateEnd")
    footprint: Any = None
    min_resolution_meter: float | None = Field(default=None, alias="minResolutionMeter")
    max_resolution_meter: float | None = Field(default=None, alias="maxResolutionMeter")
    classification: str | None = None


class Record3D(BaseModel):
    """A 3D layer record as stored in the catalog.

    Attributes:
        id: Catalog record identifier.
        links: Opaque links string; contains the tileset URL.
        product_source: Client-side path the model was ingested from.
    """

    model_config = _WIRE_CONFIG

    id: str
    links: str = ""
    product_id: str | None = Field(default=None, alias="productId")
    product_name: str | None = Field(default=None, alias="productName")
    product_source: str = Field(default="", alias="productSource")
    source_date_start: datetime | None = Field(default=None, alias="sourceDateStart")
    source_date_end: datetime | None = Field(default=None, alias="sourceDateEnd")
    min_resolution_meter: float | None = Field(default=None, alias="minResolutionMeter")
    max_resolution_meter: float | None = Field(default=None, alias="maxResolutionMeter")
    footprint: Any = None
    classification: str | None = None


class LookupOption(BaseModel):
    """One option of a lookup table (e.g. a classification value)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    value: str
    translation_code: str = Field(default="", alias="translationCode")
