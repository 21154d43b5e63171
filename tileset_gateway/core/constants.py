"""Shared gateway constants — single source of truth.

Centralises projection definitions, 3D-Tiles bounding-volume tags and
other string literals used by the validator and its collaborators.
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------

GEOCENTRIC_PROJECTION: str = "+proj=geocent +datum=WGS84 +units=m +no_defs +type=crs"
"""Earth-centred Cartesian frame used by 3D-Tiles bounding spheres."""

GEOGRAPHIC_PROJECTION: str = "+proj=longlat +datum=WGS84 +no_defs +type=crs"
"""WGS 84 longitude/latitude, the frame of every polygon this package emits."""

RADIAN_TO_DEGREE: float = 180 / math.pi

METRES_PER_KILOMETRE: float = 1000.0

# ---------------------------------------------------------------------------
# 3D-Tiles bounding volume tags
# ---------------------------------------------------------------------------

SPHERE_TAG = "sphere"
REGION_TAG = "region"
BOX_TAG = "box"

# sphere = [x, y, z, radius]; region = [west, south, east, north, minH, maxH]
MIN_SPHERE_VALUES = 4
MIN_REGION_VALUES = 4

# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

PHOTO_REALISTIC_3D = "3DPhotoRealistic"
"""Product type whose footprint/model intersection is authoritative."""

TILESET_LINK_MARKER = "api/3d/v1/b3dm/"
"""Path segment preceding the storage-relative tileset path in record links."""

# ---------------------------------------------------------------------------
# Remote file providers
# ---------------------------------------------------------------------------

NFS_PROVIDER = "nfs"
BLOB_PROVIDER = "blob"
