"""3D Tileset Gateway validation core.

Validates 3D-Tiles model submissions and metadata updates before they are
forwarded downstream: the submitted footprint must match the model's
bounding volume, and the metadata must be internally consistent.
"""

__version__ = "0.1.0"
