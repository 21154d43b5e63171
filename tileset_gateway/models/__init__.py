"""Data models and schemas.

Defines the data structures used throughout the gateway:
- BoundingVolume: Closed variant of 3D-Tiles bounding volumes
- ValidationOutcome: ``Valid`` | ``Invalid(reason)``
- IngestionPayload / UpdatePayload / Record3D: pydantic wire models
"""

from tileset_gateway.models.bounding_volume import (
    BoundingVolume,
    BoxVolume,
    RegionVolume,
    SphereVolume,
    UnknownVolume,
    parse_bounding_volume,
)
from tileset_gateway.models.outcome import VALID, Invalid, Valid, ValidationOutcome
from tileset_gateway.models.payloads import (
    GeoJsonPolygon,
    IngestionPayload,
    LookupOption,
    ModelMetadata,
    Record3D,
    UpdatePayload,
)

__all__ = [
    "VALID",
    "BoundingVolume",
    "BoxVolume",
    "GeoJsonPolygon",
    "IngestionPayload",
    "Invalid",
    "LookupOption",
    "ModelMetadata",
    "Record3D",
    "RegionVolume",
    "SphereVolume",
    "UnknownVolume",
    "UpdatePayload",
    "Valid",
    "ValidationOutcome",
    "parse_bounding_volume",
]
