"""Footprint / 3D-model validation.

- geometry_converter: bounding volume → WGS 84 polygon
- footprint: GeoJSON Polygon structure and ring closure
- intersection: footprint coverage of the model polygon
- link_resolver: tileset path from a catalog record's links
- pipeline: fail-fast ingestion, update and sources flows
"""

from tileset_gateway.validator.pipeline import ValidationPipeline

__all__ = ["ValidationPipeline"]
