"""Footprint / model overlap scoring.

Scores how well a client footprint matches the polygon derived from the
model's bounding volume:

1. Intersect footprint and model.  No shared area → ``Invalid``.
2. Union footprint and model.
3. ``coverage = 100 * area(footprint) / area(union)``.
4. ``coverage < threshold`` → ``Invalid`` reporting both values.

Areas are geodesic square metres on the WGS 84 ellipsoid
(``pyproj.Geod.geometry_area_perimeter``), so both operands are measured
the same way at any latitude.  The threshold comparison is plain
floating point with no tolerance.

Any exception raised by the polygon algebra (unbuildable rings,
topology errors on self-intersecting input) is wrapped in
``IntersectionError``: it is a fault, not a "no overlap" rejection.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tileset_gateway.core.exceptions import IntersectionError
from tileset_gateway.models.outcome import VALID, Invalid, ValidationOutcome

if TYPE_CHECKING:
    from shapely.geometry.base import BaseGeometry

logger = logging.getLogger("tileset_gateway.validator.intersection")

NO_OVERLAP_MESSAGE = "Wrong footprint! footprint's coordinates is not even close to the model!"


class IntersectionCalculator:
    """Compute coverage of a footprint against a model polygon.

    Args:
        threshold_pct: Minimum acceptable coverage, in percent.
    """

    def __init__(self, threshold_pct: float) -> None:
        self._threshold_pct = threshold_pct

    @property
    def threshold_pct(self) -> float:
        return self._threshold_pct

    def score(
        self,
        footprint: dict[str, Any],
        model_polygon: dict[str, Any],
        *,
        model_name: str = "",
    ) -> ValidationOutcome:
        """Score *footprint* against *model_polygon*.

        Raises:
            IntersectionError: If the geometry cannot be built or combined.
        """
        try:
            footprint_geom = _to_geometry(footprint)
            model_geom = _to_geometry(model_polygon)

            intersection = footprint_geom.intersection(model_geom)
            if intersection.is_empty or intersection.area == 0:
                logger.warning("Footprint does not overlap model | model=%s", model_name)
                return Invalid(NO_OVERLAP_MESSAGE)

            union = footprint_geom.union(model_geom)
            footprint_area = geodesic_area_m2(footprint_geom)
            union_area = geodesic_area_m2(union)
            coverage = 100 * footprint_area / union_area
        except Exception as exc:
            logger.error(
                "Intersection validation failed | model=%s | error=%s",
                model_name,
                exc,
            )
            msg = "An error caused during the validation of the intersection"
            raise IntersectionError(msg) from exc

        logger.debug(
            "Coverage computed | model=%s | footprint_m2=%.2f | union_m2=%.2f | coverage=%.4f%%",
            model_name,
            footprint_area,
            union_area,
            coverage,
        )

        if coverage < self._threshold_pct:
            return Invalid(
                "The footprint is not intersected enough with the model, "
                f"the coverage is: {coverage}% when the minimum coverage is {_format_pct(self._threshold_pct)}%"
            )
        return VALID


def geodesic_area_m2(geometry: BaseGeometry) -> float:
    """Geodesic area of a (multi)polygon in square metres.

    Each part is oriented counter-clockwise first so holes subtract and
    parts never cancel out.
    """
    from pyproj import Geod
    from shapely.geometry.polygon import orient

    geod = Geod(ellps="WGS84")
    parts = getattr(geometry, "geoms", [geometry])
    total_m2 = 0.0
    for part in parts:
        if part.geom_type != "Polygon":
            continue
        area_m2, _perimeter = geod.geometry_area_perimeter(orient(part, sign=1.0))
        total_m2 += area_m2
    return abs(total_m2)


def _to_geometry(polygon: dict[str, Any]) -> BaseGeometry:
    """Build a shapely geometry from a GeoJSON mapping."""
    from shapely.geometry import shape

    return shape(polygon)


def _format_pct(value: float) -> str:
    """Render *value* exactly, dropping the ``.0`` of integral floats."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
