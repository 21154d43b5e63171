"""Footprint validation: GeoJSON Polygon structure and ring closure.

The structure is declared once as a strict pydantic model so new rules
are added to the schema, not to call sites:

- ``type`` must be ``"Polygon"``
- ``coordinates`` is an array of rings, each ring an array of positions,
  each position 2 or 3 numbers
- no other top-level properties

Ring closure compares the first and last position of the outer ring
component-wise with exact equality.
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from tileset_gateway.models.outcome import VALID, Invalid, ValidationOutcome

logger = logging.getLogger("tileset_gateway.validator.footprint")

Position = Annotated[list[float], Field(min_length=2, max_length=3)]


class FootprintSchema(BaseModel):
    """Structural schema of a footprint (GeoJSON Polygon)."""

    model_config = ConfigDict(extra="forbid", strict=True)

    type: Literal["Polygon"]
    coordinates: Annotated[list[Annotated[list[Position], Field(min_length=1)]], Field(min_length=1)]


def validate_schema(polygon: object) -> bool:
    """Return ``True`` if *polygon* matches ``FootprintSchema``."""
    try:
        FootprintSchema.model_validate(polygon)
    except SchemaError as exc:
        logger.debug("Footprint schema mismatch | errors=%d", exc.error_count())
        return False
    return True


def validate_ring_closure(polygon: dict[str, Any]) -> bool:
    """Return ``True`` if the outer ring's first and last positions are equal."""
    coordinates = polygon.get("coordinates") or []
    if not coordinates or not coordinates[0]:
        return False
    outer = coordinates[0]
    return list(outer[0]) == list(outer[-1])


def validate_footprint(polygon: Any) -> ValidationOutcome:
    """Run the schema check, then the ring-closure check.

    Returns:
        ``VALID``, or ``Invalid`` embedding the serialised footprint.
    """
    if not validate_schema(polygon):
        return Invalid(
            "Invalid footprint provided. Must be in a GeoJson format of a Polygon. "
            'Should contain "type" and "coordinates" only. '
            f"footprint: {serialise_polygon(polygon)}"
        )
    if not validate_ring_closure(polygon):
        return Invalid(
            f"Wrong footprint: {serialise_polygon(polygon)} "
            "the first and last coordinates should be equal"
        )
    logger.debug("Footprint validated | step=footprint")
    return VALID


def serialise_polygon(polygon: Any) -> str:
    """Compact JSON rendering of a polygon for client-facing messages."""
    return json.dumps(polygon, separators=(",", ":"), default=str)
