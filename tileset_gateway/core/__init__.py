"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Projections, bounding-volume tags, product types, link marker
- exceptions: Custom exception hierarchy
"""
