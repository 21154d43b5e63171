"""Tileset location from a catalog record's ``links`` string.

Catalog records do not store the tileset path directly; they carry an
opaque links string whose tileset URL looks like::

    https://host/api/3d/v1/b3dm/<model-id>/<sub/path/>tileset.json

Everything after ``api/3d/v1/b3dm/`` is the storage-relative tileset
path.  The fetchable path for the update flow is the record's
``productSource`` remapped onto the mounted volume, joined with the
tileset filename from the link.
"""

from __future__ import annotations

import logging
import re

from tileset_gateway.core.constants import TILESET_LINK_MARKER
from tileset_gateway.core.exceptions import LinkFormatError
from tileset_gateway.utils.paths import to_mounted_path

logger = logging.getLogger("tileset_gateway.validator.link_resolver")

_LINK_RE = re.compile(re.escape(TILESET_LINK_MARKER) + r"(?P<path>[^\s,;\"']+)")


def extract_tileset_relative_path(link: str) -> str:
    """Return the storage-relative path following ``api/3d/v1/b3dm/``.

    Raises:
        LinkFormatError: If the marker (or anything after it) is absent.
    """
    match = _LINK_RE.search(link)
    if match is None:
        msg = f"There is no good link in record, links: {link}"
        raise LinkFormatError(msg)
    return match.group("path")


def resolve_tileset_full_path(
    product_source: str,
    links: str,
    *,
    base_path: str,
    pv_path: str,
) -> str:
    """Build the mounted path of a record's tileset.

    Args:
        product_source: Client-side model folder the record was ingested from.
        links: The record's links string.
        base_path: Client-side storage root.
        pv_path: Mounted storage root.

    Raises:
        LinkFormatError: If the link has no tileset path or does not end
            in a ``.json`` tileset filename.
    """
    relative_path = extract_tileset_relative_path(links)
    tileset_filename = relative_path.rstrip("/").rsplit("/", 1)[-1]
    if not tileset_filename.endswith(".json"):
        msg = f"There is no good link in record, links: {links}"
        raise LinkFormatError(msg)

    model_path = to_mounted_path(product_source, base_path=base_path, pv_path=pv_path)
    full_path = f"{model_path.rstrip('/')}/{tileset_filename}"
    logger.debug(
        "Resolved tileset path | relative=%s | full_path=%s",
        relative_path,
        full_path,
    )
    return full_path
