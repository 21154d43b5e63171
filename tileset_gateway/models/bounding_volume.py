"""3D-Tiles bounding volume as a closed variant type.

A tileset declares its spatial extent in ``root.boundingVolume`` as exactly
one of ``sphere``, ``region`` or ``box``.  ``parse_bounding_volume`` turns
the raw JSON into one of four frozen dataclasses; anything it cannot
recognise (missing keys, too few numbers) becomes ``UnknownVolume`` so
callers handle the bad-format case as an ordinary branch.

Units:
- ``SphereVolume``: centre ``(x, y, z)`` in geocentric metres, radius in metres.
- ``RegionVolume``: west/south/east/north in radians, heights in metres.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tileset_gateway.core.constants import (
    BOX_TAG,
    MIN_REGION_VALUES,
    MIN_SPHERE_VALUES,
    REGION_TAG,
    SPHERE_TAG,
)


@dataclass(frozen=True, slots=True)
class SphereVolume:
    """Bounding sphere in the Earth-centred Cartesian frame."""

    x: float
    y: float
    z: float
    radius_m: float


@dataclass(frozen=True, slots=True)
class RegionVolume:
    """Bounding region in radians (heights are ignored by the footprint check)."""

    west: float
    south: float
    east: float
    north: float
    min_height: float = 0.0
    max_height: float = 0.0


@dataclass(frozen=True, slots=True)
class BoxVolume:
    """Oriented bounding box.  Recognised but not supported."""

    values: tuple[float, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class UnknownVolume:
    """The document did not carry a usable 3D-Tiles bounding volume."""

    detail: str = ""


BoundingVolume = SphereVolume | RegionVolume | BoxVolume | UnknownVolume


def parse_bounding_volume(tileset: object) -> BoundingVolume:
    """Extract ``root.boundingVolume`` from a parsed tileset document.

    Tag precedence is ``sphere``, then ``region``, then ``box``.

    Args:
        tileset: The parsed tileset JSON (any JSON value).

    Returns:
        The matching ``BoundingVolume`` variant.
    """
    if not isinstance(tileset, dict):
        return UnknownVolume("tileset is not a JSON object")
    root = tileset.get("root")
    if not isinstance(root, dict):
        return UnknownVolume("missing root")
    shape = root.get("boundingVolume")
    if not isinstance(shape, dict):
        return UnknownVolume("missing root.boundingVolume")

    if shape.get(SPHERE_TAG) is not None:
        values = _numbers(shape[SPHERE_TAG], MIN_SPHERE_VALUES)
        if values is None:
            return UnknownVolume(f"{SPHERE_TAG} needs at least {MIN_SPHERE_VALUES} numbers")
        return SphereVolume(x=values[0], y=values[1], z=values[2], radius_m=values[3])

    if shape.get(REGION_TAG) is not None:
        values = _numbers(shape[REGION_TAG], MIN_REGION_VALUES)
        if values is None:
            return UnknownVolume(f"{REGION_TAG} needs at least {MIN_REGION_VALUES} numbers")
        heights = values[4:6]
        return RegionVolume(
            west=values[0],
            south=values[1],
            east=values[2],
            north=values[3],
            min_height=heights[0] if len(heights) > 0 else 0.0,
            max_height=heights[1] if len(heights) > 1 else 0.0,
        )

    if shape.get(BOX_TAG) is not None:
        raw = shape[BOX_TAG]
        values = _numbers(raw, 0) if isinstance(raw, list) else None
        return BoxVolume(values=tuple(values or ()))

    return UnknownVolume("no sphere, region or box")


def _numbers(raw: Any, minimum: int) -> list[float] | None:
    """Return *raw* as floats if it is a numeric list of at least *minimum* items."""
    if not isinstance(raw, list) or len(raw) < minimum:
        return None
    if not all(isinstance(v, int | float) and not isinstance(v, bool) for v in raw):
        return None
    return [float(v) for v in raw]
