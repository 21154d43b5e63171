"""Unit tests for footprint structure and ring-closure validation."""

from __future__ import annotations

import pytest

from tileset_gateway.models.outcome import VALID, Invalid
from tileset_gateway.validator.footprint import (
    serialise_polygon,
    validate_footprint,
    validate_ring_closure,
    validate_schema,
)

SQUARE = {
    "type": "Polygon",
    "coordinates": [[[34.0, 31.0], [35.0, 31.0], [35.0, 32.0], [34.0, 32.0], [34.0, 31.0]]],
}


class TestValidateSchema:
    """Declarative GeoJSON Polygon schema."""

    def test_valid_polygon(self, region_footprint: dict) -> None:
        assert validate_schema(region_footprint) is True

    def test_with_heights(self) -> None:
        polygon = {
            "type": "Polygon",
            "coordinates": [[[0, 0, 10], [1, 0, 10], [1, 1, 10], [0, 0, 10]]],
        }
        assert validate_schema(polygon) is True

    def test_with_hole(self) -> None:
        polygon = {
            "type": "Polygon",
            "coordinates": [
                [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]],
                [[1, 1], [2, 1], [2, 2], [1, 1]],
            ],
        }
        assert validate_schema(polygon) is True

    @pytest.mark.parametrize(
        "polygon",
        [
            None,
            [],
            "Polygon",
            {"type": "Polygon"},
            {"coordinates": SQUARE["coordinates"]},
            {"type": "MultiPolygon", "coordinates": [SQUARE["coordinates"]]},
            {"type": "Polygon", "coordinates": SQUARE["coordinates"], "bbox": [0, 0, 1, 1]},
            {"type": "Polygon", "coordinates": []},
            {"type": "Polygon", "coordinates": [[]]},
            {"type": "Polygon", "coordinates": [[0, 0], [1, 1]]},
            {"type": "Polygon", "coordinates": [[[0], [1, 1], [0]]]},
            {"type": "Polygon", "coordinates": [[[0, 0, 0, 0], [1, 1, 1, 1]]]},
            {"type": "Polygon", "coordinates": [[["0", "0"], ["1", "1"]]]},
            {"type": "Polygon", "coordinates": [[[True, False], [1, 1]]]},
        ],
    )
    def test_rejected(self, polygon: object) -> None:
        assert validate_schema(polygon) is False


class TestValidateRingClosure:
    """First and last positions of the outer ring must match exactly."""

    def test_closed(self) -> None:
        assert validate_ring_closure(SQUARE) is True

    def test_open(self) -> None:
        polygon = {"type": "Polygon", "coordinates": [SQUARE["coordinates"][0][:-1]]}
        assert validate_ring_closure(polygon) is False

    def test_no_tolerance(self) -> None:
        ring = [[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 0.000000001]]
        assert validate_ring_closure({"type": "Polygon", "coordinates": [ring]}) is False

    def test_height_compared(self) -> None:
        ring = [[0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 0, 2]]
        assert validate_ring_closure({"type": "Polygon", "coordinates": [ring]}) is False

    def test_only_outer_ring_checked(self) -> None:
        polygon = {
            "type": "Polygon",
            "coordinates": [SQUARE["coordinates"][0], [[0, 0], [1, 1], [2, 2]]],
        }
        assert validate_ring_closure(polygon) is True

    def test_empty(self) -> None:
        assert validate_ring_closure({"type": "Polygon", "coordinates": []}) is False


class TestValidateFootprint:
    """Schema first, then ring closure."""

    def test_valid(self, sphere_footprint: dict) -> None:
        assert validate_footprint(sphere_footprint) == VALID

    def test_schema_message(self) -> None:
        polygon = {"type": "Polygon", "coordinates": SQUARE["coordinates"], "name": "x"}
        outcome = validate_footprint(polygon)
        assert isinstance(outcome, Invalid)
        assert outcome.reason == (
            "Invalid footprint provided. Must be in a GeoJson format of a Polygon. "
            'Should contain "type" and "coordinates" only. '
            f"footprint: {serialise_polygon(polygon)}"
        )

    def test_missing_footprint(self) -> None:
        outcome = validate_footprint(None)
        assert isinstance(outcome, Invalid)
        assert outcome.reason.endswith("footprint: null")

    def test_ring_message(self) -> None:
        polygon = {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1]]]}
        outcome = validate_footprint(polygon)
        assert outcome == Invalid(
            'Wrong footprint: {"type":"Polygon","coordinates":[[[0,0],[1,0],[1,1],[0,1]]]} '
            "the first and last coordinates should be equal"
        )

    def test_schema_checked_before_closure(self) -> None:
        polygon = {"type": "LineString", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 1]]]}
        outcome = validate_footprint(polygon)
        assert isinstance(outcome, Invalid)
        assert outcome.reason.startswith("Invalid footprint provided.")
