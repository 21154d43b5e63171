"""Bounding volume → WGS 84 polygon conversion.

Turns the two supported 3D-Tiles bounding volumes into GeoJSON polygons
in longitude/latitude degrees:

- **sphere**: the centre is transformed from the geocentric (ECEF) frame to
  WGS 84 with pyproj; the radius (metres) is converted to kilometres and a
  geodesic circle of that radius is traced around the centre.
- **region**: the west/south/east/north radians are converted to degrees and
  the axis-aligned rectangle is returned.  Heights are ignored.

``box`` volumes are not converted here; callers reject them upstream.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import TYPE_CHECKING

from tileset_gateway.core.constants import (
    GEOCENTRIC_PROJECTION,
    GEOGRAPHIC_PROJECTION,
    METRES_PER_KILOMETRE,
    RADIAN_TO_DEGREE,
)

if TYPE_CHECKING:
    from pyproj import Transformer

    from tileset_gateway.models.bounding_volume import RegionVolume, SphereVolume
    from tileset_gateway.models.payloads import GeoJsonPolygon

# Vertices traced around an ellipse (excluding the closing vertex)
ELLIPSE_STEPS = 64


def sphere_to_polygon(sphere: SphereVolume, *, steps: int = ELLIPSE_STEPS) -> GeoJsonPolygon:
    """Convert a bounding sphere into a circular WGS 84 polygon.

    Args:
        sphere: Sphere with geocentric centre and radius in metres.
        steps: Number of vertices on the circle.

    Returns:
        A closed GeoJSON Polygon centred on the geographic projection of
        the sphere centre, with both semi-axes equal to the radius.
    """
    lon, lat, _height = _geocentric_to_geographic().transform(sphere.x, sphere.y, sphere.z)
    radius_km = sphere.radius_m / METRES_PER_KILOMETRE
    return ellipse_polygon(lon, lat, radius_km, radius_km, steps=steps)


def region_to_polygon(region: RegionVolume) -> GeoJsonPolygon:
    """Convert a bounding region (radians) into its degree bounding rectangle.

    The ring runs south-west → south-east → north-east → north-west →
    south-west.
    """
    west, south, east, north = (
        region.west * RADIAN_TO_DEGREE,
        region.south * RADIAN_TO_DEGREE,
        region.east * RADIAN_TO_DEGREE,
        region.north * RADIAN_TO_DEGREE,
    )
    return {
        "type": "Polygon",
        "coordinates": [
            [
                [west, south],
                [east, south],
                [east, north],
                [west, north],
                [west, south],
            ]
        ],
    }


def ellipse_polygon(
    lon: float,
    lat: float,
    x_semi_axis_km: float,
    y_semi_axis_km: float,
    *,
    steps: int = ELLIPSE_STEPS,
) -> GeoJsonPolygon:
    """Trace a geodesic ellipse on the WGS 84 ellipsoid.

    The x semi-axis runs east-west and the y semi-axis north-south.  Each
    vertex is placed with ``pyproj.Geod.fwd`` so distances are true
    ground distances at any latitude.  The ring is counter-clockwise.

    Args:
        lon: Centre longitude in degrees.
        lat: Centre latitude in degrees.
        x_semi_axis_km: East-west semi-axis in kilometres.
        y_semi_axis_km: North-south semi-axis in kilometres.
        steps: Number of vertices (excluding closure).

    Returns:
        A closed GeoJSON Polygon.
    """
    from pyproj import Geod

    geod = Geod(ellps="WGS84")

    azimuths: list[float] = []
    distances_m: list[float] = []
    for i in range(steps):
        theta = 2 * math.pi * i / steps
        # polar form of an ellipse, angle measured counter-clockwise from east
        denominator = math.hypot(
            y_semi_axis_km * math.cos(theta),
            x_semi_axis_km * math.sin(theta),
        )
        radius_km = (x_semi_axis_km * y_semi_axis_km) / denominator if denominator else 0.0
        azimuths.append(90.0 - math.degrees(theta))
        distances_m.append(radius_km * METRES_PER_KILOMETRE)

    lons, lats, _back_azimuths = geod.fwd([lon] * steps, [lat] * steps, azimuths, distances_m)
    ring = [[float(x), float(y)] for x, y in zip(lons, lats, strict=True)]
    ring.append(list(ring[0]))
    return {"type": "Polygon", "coordinates": [ring]}


@lru_cache(maxsize=1)
def _geocentric_to_geographic() -> Transformer:
    """Build (once) the ECEF → WGS 84 longitude/latitude transformer."""
    from pyproj import Transformer

    return Transformer.from_crs(GEOCENTRIC_PROJECTION, GEOGRAPHIC_PROJECTION, always_xy=True)
